"""Record emitter — aggregates to persisted record shapes."""

from authorship.engines.emitter.emitter import emit_records
from authorship.engines.emitter.records import (
    RefAuthorship,
    RepoAuthor,
    RepoContribution,
    RepositoryAuthorship,
    RepositoryClientship,
    RepositoryRecords,
    SymbolAuthor,
    SymbolAuthorship,
    SymbolClient,
)

__all__ = [
    "RefAuthorship",
    "RepoAuthor",
    "RepoContribution",
    "RepositoryAuthorship",
    "RepositoryClientship",
    "RepositoryRecords",
    "SymbolAuthor",
    "SymbolAuthorship",
    "SymbolClient",
    "emit_records",
]

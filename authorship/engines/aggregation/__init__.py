"""Aggregation engine — repository authorship and clientship rollups."""

from authorship.engines.aggregation.aggregator import (
    aggregate_repository,
    check_complete,
    merge_clients,
    rollup_authors,
    rollup_clientships,
)
from authorship.engines.aggregation.models import (
    Clientship,
    FilePartial,
    RepoAuthorship,
    RepositoryAggregate,
    SkippedFile,
    SymbolClientship,
)

__all__ = [
    "Clientship",
    "FilePartial",
    "RepoAuthorship",
    "RepositoryAggregate",
    "SkippedFile",
    "SymbolClientship",
    "aggregate_repository",
    "check_complete",
    "merge_clients",
    "rollup_authors",
    "rollup_clientships",
]

"""Authorship: attribute symbols and references to the contributors who wrote them."""

__version__ = "0.1.0"

from authorship.engines.aggregation import RepositoryAggregate, aggregate_repository
from authorship.engines.attribution import attribute_references, attribute_symbol
from authorship.engines.blame import BlameProvider, FileBlame, GitBlameProvider
from authorship.engines.emitter import RepositoryRecords, emit_records
from authorship.engines.pipeline import AuthorshipRunner, RunResult
from authorship.engines.symbols import JsonGraphProvider, SymbolGraphProvider, SymbolKey
from authorship.services.authorship_sink import AuthorshipSink

__all__ = [
    "AuthorshipRunner",
    "AuthorshipSink",
    "BlameProvider",
    "FileBlame",
    "GitBlameProvider",
    "JsonGraphProvider",
    "RepositoryAggregate",
    "RepositoryRecords",
    "RunResult",
    "SymbolGraphProvider",
    "SymbolKey",
    "aggregate_repository",
    "attribute_references",
    "attribute_symbol",
    "emit_records",
]

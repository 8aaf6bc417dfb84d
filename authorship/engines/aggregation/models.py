"""Data models for the aggregation engine."""

from __future__ import annotations

from dataclasses import dataclass, field

from authorship.engines.attribution.models import (
    AuthorshipInfo,
    ClientContribution,
    RefAttribution,
    ReferenceAttribution,
    SymbolAttribution,
)
from authorship.engines.symbols.models import SymbolKey
from authorship.engines.symbols.resolver import SkippedSymbol


@dataclass(frozen=True, order=True)
class SkippedFile:
    """A file left out of the run (blame unavailable, timed out, ...)."""

    path: str
    reason: str


@dataclass
class FilePartial:
    """Everything the parallel phase produced for one file."""

    path: str
    symbols: list[SymbolAttribution] = field(default_factory=list)
    references: ReferenceAttribution = field(
        default_factory=lambda: ReferenceAttribution(refs=[], clients={}, skipped=[])
    )
    skipped_symbols: list[SkippedSymbol] = field(default_factory=list)


@dataclass(frozen=True)
class RepoAuthorship:
    """One author's rollup within a repository."""

    info: AuthorshipInfo
    symbol_count: int
    symbols_proportion: float
    exported_symbol_count: int
    exported_symbols_proportion: float

    @property
    def author_email(self) -> str:
        return self.info.author_email

    @property
    def author_key(self) -> str:
        return self.info.author_key


@dataclass(frozen=True)
class SymbolClientship:
    """One author's use of one symbol, merged across files."""

    symbol: SymbolKey
    contribution: ClientContribution

    @property
    def author_email(self) -> str:
        return self.contribution.info.author_email

    @property
    def author_key(self) -> str:
        return self.contribution.info.author_key


@dataclass(frozen=True)
class Clientship:
    """An author in ``source_repo`` referring to symbols defined in ``symbol_repo``."""

    source_repo: str
    symbol_repo: str
    info: AuthorshipInfo
    ref_count: int

    @property
    def author_email(self) -> str:
        return self.info.author_email

    @property
    def author_key(self) -> str:
        return self.info.author_key


@dataclass
class RepositoryAggregate:
    """Final, complete rollup for one repository at one commit.

    All lists are sorted, so equal inputs give equal aggregates whatever
    order the files were processed in.
    """

    repo: str
    commit: str
    symbols: list[SymbolAttribution]
    refs: list[RefAttribution]
    symbol_clients: list[SymbolClientship]
    authors: list[RepoAuthorship]
    clientships: list[Clientship]
    total_symbols: int
    total_exported_symbols: int
    skipped_files: list[SkippedFile] = field(default_factory=list)
    skipped_symbols: list[SkippedSymbol] = field(default_factory=list)

    @property
    def inconsistent_symbols(self) -> list[SymbolKey]:
        return [s.key for s in self.symbols if s.inconsistent]

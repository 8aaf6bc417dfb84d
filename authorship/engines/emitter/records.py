"""Output record types handed to the persistence sink.

All records are immutable facts about one repository at one commit.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from authorship.engines.attribution.models import AuthorshipInfo
from authorship.engines.symbols.models import RefEdge, SymbolKey
from authorship.identity import AuthorIdentity, author_key, identity_email, identity_uid


@dataclass(frozen=True)
class SymbolAuthorship:
    info: AuthorshipInfo
    exported: bool
    chars: int
    chars_proportion: float


@dataclass(frozen=True)
class RepositoryAuthorship:
    info: AuthorshipInfo

    # Number of symbols this author contributed to, where "contributed to"
    # means committed any hunk of code to the definition of.
    symbol_count: int
    symbols_proportion: float

    exported_symbol_count: int
    exported_symbols_proportion: float


class _Identified:
    """``uid`` / ``email`` / ``author_key`` columns derived from the identity variant."""

    identity: AuthorIdentity

    @property
    def uid(self) -> int | None:
        return identity_uid(self.identity)

    @property
    def email(self) -> str | None:
        return identity_email(self.identity)

    @property
    def author_key(self) -> str:
        return author_key(self.identity)


@dataclass(frozen=True)
class SymbolAuthor(_Identified):
    repo: str
    commit: str
    symbol: SymbolKey
    identity: AuthorIdentity
    authorship: SymbolAuthorship
    inconsistent: bool = False


@dataclass(frozen=True)
class SymbolClient(_Identified):
    repo: str  # repository the references were made from
    commit: str
    symbol: SymbolKey
    identity: AuthorIdentity
    info: AuthorshipInfo  # of the reference sites, not of the symbol
    use_count: int


@dataclass(frozen=True)
class RefAuthorship(_Identified):
    repo: str
    commit: str
    ref: RefEdge
    identity: AuthorIdentity
    info: AuthorshipInfo


@dataclass(frozen=True)
class RepoAuthor(_Identified):
    """An author of ``repo`` (repository-side view)."""

    repo: str
    commit: str
    identity: AuthorIdentity
    authorship: RepositoryAuthorship


@dataclass(frozen=True)
class RepoContribution(_Identified):
    """A repository the author contributed to (author-side view)."""

    identity: AuthorIdentity
    repo: str
    commit: str
    authorship: RepositoryAuthorship


@dataclass(frozen=True)
class RepositoryClientship(_Identified):
    repo: str  # repository the references were committed to
    commit: str
    identity: AuthorIdentity
    info: AuthorshipInfo

    # Repository defining the symbols this author referred to.
    symbol_repo: str

    ref_count: int


@dataclass(frozen=True)
class RepositoryRecords:
    """Everything emitted for one repository; written to the sink as one unit."""

    repo: str
    commit: str
    symbol_authors: tuple[SymbolAuthor, ...] = field(default_factory=tuple)
    symbol_clients: tuple[SymbolClient, ...] = field(default_factory=tuple)
    ref_authorships: tuple[RefAuthorship, ...] = field(default_factory=tuple)
    repo_authors: tuple[RepoAuthor, ...] = field(default_factory=tuple)
    repo_contributions: tuple[RepoContribution, ...] = field(default_factory=tuple)
    clientships: tuple[RepositoryClientship, ...] = field(default_factory=tuple)

    def counts(self) -> dict[str, int]:
        return {
            "symbol_authors": len(self.symbol_authors),
            "symbol_clients": len(self.symbol_clients),
            "ref_authorships": len(self.ref_authorships),
            "repo_authors": len(self.repo_authors),
            "repo_contributions": len(self.repo_contributions),
            "clientships": len(self.clientships),
        }

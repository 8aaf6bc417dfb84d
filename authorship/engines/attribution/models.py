"""Data models for the symbol and reference attributors."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from authorship.engines.blame.models import BlameEntry
from authorship.engines.symbols.models import RefEdge, ResolvedSymbol, SymbolKey
from authorship.identity import (
    AuthorIdentity,
    EmailIdentityResolver,
    IdentityResolver,
    author_key,
)

_EMAIL_ONLY = EmailIdentityResolver()


@dataclass(frozen=True)
class AuthorshipInfo:
    """Who, and the most recent commit they contributed to the described thing.

    ``author_email`` is the blame email of that commit; ``identity`` is the
    author it resolved to. Without an explicit identity the author is known
    by email only.
    """

    author_email: str
    last_commit_date: datetime
    last_commit_id: str
    identity: AuthorIdentity | None = None

    def __post_init__(self) -> None:
        if self.identity is None:
            object.__setattr__(self, "identity", _EMAIL_ONLY.resolve(self.author_email))

    @classmethod
    def from_entry(
        cls, entry: BlameEntry, resolver: IdentityResolver | None = None
    ) -> AuthorshipInfo:
        return cls(
            author_email=entry.author_email,
            last_commit_date=entry.commit_date,
            last_commit_id=entry.commit_id,
            identity=(resolver or _EMAIL_ONLY).resolve(entry.author_email),
        )

    @property
    def author_key(self) -> str:
        return author_key(self.identity)

    @property
    def recency(self) -> tuple[datetime, str]:
        return (self.last_commit_date, self.last_commit_id)

    def latest(self, other: AuthorshipInfo) -> AuthorshipInfo:
        """Return whichever of the two refers to the more recent commit."""
        return other if other.recency > self.recency else self


@dataclass(frozen=True)
class AuthorContribution:
    """One author's share of one symbol."""

    info: AuthorshipInfo
    chars: int

    @property
    def author_email(self) -> str:
        return self.info.author_email

    @property
    def author_key(self) -> str:
        return self.info.author_key

    def merge(self, other: AuthorContribution) -> AuthorContribution:
        return AuthorContribution(info=self.info.latest(other.info), chars=self.chars + other.chars)


@dataclass(frozen=True)
class SymbolAttribution:
    """Per-author character counts for one resolved symbol.

    ``authors`` is sorted by author key. ``inconsistent`` is set when the counts
    do not add up to the symbol's size (see ProportionMismatch).
    """

    symbol: ResolvedSymbol
    authors: tuple[AuthorContribution, ...]
    inconsistent: bool = False

    @property
    def key(self) -> SymbolKey:
        return self.symbol.key

    @property
    def exported(self) -> bool:
        return self.symbol.exported

    @property
    def total_chars(self) -> int:
        return self.symbol.total_chars

    @property
    def attributed_chars(self) -> int:
        return sum(a.chars for a in self.authors)

    def proportion(self, contribution: AuthorContribution) -> float:
        return contribution.chars / self.total_chars

    @property
    def last_commit(self) -> AuthorshipInfo | None:
        """Most recent commit touching the symbol, across all authors."""
        latest: AuthorshipInfo | None = None
        for a in self.authors:
            latest = a.info if latest is None else latest.latest(a.info)
        return latest


@dataclass(frozen=True)
class ClientContribution:
    """How often one author used one symbol, and their latest such use."""

    info: AuthorshipInfo
    use_count: int

    def merge(self, other: ClientContribution) -> ClientContribution:
        return ClientContribution(
            info=self.info.latest(other.info), use_count=self.use_count + other.use_count
        )


@dataclass(frozen=True)
class RefAttribution:
    """The blame owner of one reference site."""

    edge: RefEdge
    info: AuthorshipInfo


ClientKey = tuple[SymbolKey, str]  # (target symbol, author key)


@dataclass
class ReferenceAttribution:
    """Reference attributor output for one file."""

    refs: list[RefAttribution]
    clients: dict[ClientKey, ClientContribution]
    skipped: list[RefEdge]

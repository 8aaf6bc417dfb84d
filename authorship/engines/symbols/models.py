"""Data models for symbol-graph entries and resolved symbols."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class SymbolKey:
    """Stable identity of a symbol within a commit snapshot."""

    repo: str  # repository URI
    path: str  # defining file, relative to the repository root
    name: str  # name or signature

    def __str__(self) -> str:
        return f"{self.repo}:{self.path}:{self.name}"


@dataclass(frozen=True)
class SymbolDef:
    """A symbol entry as supplied by the graph provider.

    ``start``/``end`` are character offsets into ``key.path`` (end exclusive).
    A key may appear more than once when a definition has several spans.
    """

    key: SymbolKey
    exported: bool
    start: int
    end: int


@dataclass(frozen=True, order=True)
class RefEdge:
    """A use of ``target`` at ``[start, end)`` in ``repo``/``path``."""

    repo: str
    path: str
    start: int
    end: int
    target: SymbolKey


@dataclass(frozen=True, order=True)
class Span:
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class ResolvedSymbol:
    """A symbol with validated, sorted, non-overlapping spans."""

    key: SymbolKey
    exported: bool
    spans: tuple[Span, ...]

    @property
    def total_chars(self) -> int:
        return sum(s.length for s in self.spans)

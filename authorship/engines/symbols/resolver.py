"""Symbol span resolver — symbol graph entries to validated character spans."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass

import structlog

from authorship.engines.symbols.models import ResolvedSymbol, Span, SymbolDef, SymbolKey
from authorship.exceptions import SymbolGraphInconsistent

log = structlog.get_logger("authorship.engine")


@dataclass(frozen=True)
class SkippedSymbol:
    key: SymbolKey
    reason: str


def resolve_symbol(key: SymbolKey, defs: list[SymbolDef], file_length: int) -> ResolvedSymbol:
    """Resolve all graph entries of one symbol.

    Boundaries are taken verbatim from the graph; nothing is clipped.
    Raises :class:`SymbolGraphInconsistent` if a span lies outside the file,
    is empty, overlaps another span of the same symbol, or the entries
    disagree on the exported flag.
    """
    exported = {d.exported for d in defs}
    if len(exported) != 1:
        raise SymbolGraphInconsistent(str(key), "conflicting exported flags")

    spans = sorted(Span(d.start, d.end) for d in defs) if defs else []
    if not spans:
        raise SymbolGraphInconsistent(str(key), "no spans")

    prev_end = 0
    for span in spans:
        if span.start < 0 or span.end > file_length:
            raise SymbolGraphInconsistent(
                str(key), f"span [{span.start}, {span.end}) outside file of length {file_length}"
            )
        if span.end <= span.start:
            raise SymbolGraphInconsistent(str(key), f"empty span [{span.start}, {span.end})")
        if span.start < prev_end:
            raise SymbolGraphInconsistent(
                str(key), f"span [{span.start}, {span.end}) overlaps previous span"
            )
        prev_end = span.end

    return ResolvedSymbol(key=key, exported=exported.pop(), spans=tuple(spans))


def resolve_symbols(
    defs: list[SymbolDef], file_length: int
) -> tuple[list[ResolvedSymbol], list[SkippedSymbol]]:
    """Resolve every symbol defined in one file.

    Different symbols may overlap (nested definitions); each one is resolved
    on its own. Inconsistent symbols are skipped and logged, never fatal.
    """
    by_key: dict[SymbolKey, list[SymbolDef]] = defaultdict(list)
    for d in defs:
        by_key[d.key].append(d)

    resolved: list[ResolvedSymbol] = []
    skipped: list[SkippedSymbol] = []
    for key in sorted(by_key):
        try:
            resolved.append(resolve_symbol(key, by_key[key], file_length))
        except SymbolGraphInconsistent as exc:
            log.warning("symbols.inconsistent", symbol=str(key), reason=exc.reason)
            skipped.append(SkippedSymbol(key=key, reason=exc.reason))
    return resolved, skipped

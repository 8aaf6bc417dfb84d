"""Authorship attributor — intersect symbol spans with blame ownership."""

from __future__ import annotations

import math

import structlog

from authorship.core.config import PROPORTION_EPSILON
from authorship.engines.attribution.models import (
    AuthorContribution,
    AuthorshipInfo,
    SymbolAttribution,
)
from authorship.engines.blame.models import FileBlame
from authorship.engines.symbols.models import ResolvedSymbol
from authorship.exceptions import ProportionMismatch
from authorship.identity import IdentityResolver

log = structlog.get_logger("authorship.engine")


def attribute_symbol(
    symbol: ResolvedSymbol,
    blame: FileBlame,
    epsilon: float = PROPORTION_EPSILON,
    resolver: IdentityResolver | None = None,
) -> SymbolAttribution:
    """Count, per author, the characters of *symbol* they last touched.

    Blame emails are resolved through *resolver* first, so an author who
    committed under several emails is counted once. The last commit recorded
    for each author is the most recent of their blame entries inside the
    symbol. A symbol whose counts or proportions do not add up is returned
    with ``inconsistent=True``.
    """
    acc: dict[str, AuthorContribution] = {}
    for span in symbol.spans:
        for entry, chars in blame.runs(span.start, span.end):
            info = AuthorshipInfo.from_entry(entry, resolver)
            piece = AuthorContribution(info=info, chars=chars)
            prev = acc.get(info.author_key)
            acc[info.author_key] = piece if prev is None else prev.merge(piece)

    authors = tuple(acc[key] for key in sorted(acc))
    attribution = SymbolAttribution(symbol=symbol, authors=authors)
    return check_proportions(attribution, epsilon)


def check_proportions(
    attribution: SymbolAttribution, epsilon: float = PROPORTION_EPSILON
) -> SymbolAttribution:
    """Flag *attribution* inconsistent when its shares do not sum to one."""
    total_chars = attribution.total_chars
    chars = attribution.attributed_chars
    total = 0.0
    if total_chars:
        total = math.fsum(attribution.proportion(a) for a in attribution.authors)
    if chars == total_chars and abs(total - 1.0) <= epsilon:
        return attribution

    err = ProportionMismatch(str(attribution.key), total, chars, total_chars)
    log.warning(
        "attribution.proportion_mismatch",
        symbol=str(attribution.key),
        proportion_sum=total,
        chars=chars,
        total_chars=total_chars,
        error=str(err),
    )
    return SymbolAttribution(
        symbol=attribution.symbol, authors=attribution.authors, inconsistent=True
    )

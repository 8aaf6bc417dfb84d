"""Authorship and reference attributors."""

from authorship.engines.attribution.models import (
    AuthorContribution,
    AuthorshipInfo,
    ClientContribution,
    RefAttribution,
    ReferenceAttribution,
    SymbolAttribution,
)
from authorship.engines.attribution.references import attribute_references
from authorship.engines.attribution.symbols import attribute_symbol, check_proportions

__all__ = [
    "AuthorContribution",
    "AuthorshipInfo",
    "ClientContribution",
    "RefAttribution",
    "ReferenceAttribution",
    "SymbolAttribution",
    "attribute_references",
    "attribute_symbol",
    "check_proportions",
]

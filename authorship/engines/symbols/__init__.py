"""Symbol span resolver — symbol graph entries to character spans."""

from authorship.engines.symbols.graph import JsonGraphProvider, SymbolGraphProvider
from authorship.engines.symbols.models import RefEdge, ResolvedSymbol, Span, SymbolDef, SymbolKey
from authorship.engines.symbols.resolver import SkippedSymbol, resolve_symbol, resolve_symbols

__all__ = [
    "JsonGraphProvider",
    "RefEdge",
    "ResolvedSymbol",
    "SkippedSymbol",
    "Span",
    "SymbolDef",
    "SymbolGraphProvider",
    "SymbolKey",
    "resolve_symbol",
    "resolve_symbols",
]

"""Kind specificity order used to pick the enclosing symbol of a reference."""

from __future__ import annotations

from lsp_gxl.models import Symbol, SymbolKind

# Most specific first. Covers every SymbolKind, exported or not.
SPECIFICITY_ORDER: tuple[SymbolKind, ...] = (
    SymbolKind.OPERATOR,
    SymbolKind.EVENT,
    SymbolKind.STRUCT,
    SymbolKind.NULL,
    SymbolKind.KEY,
    SymbolKind.OBJECT,
    SymbolKind.ARRAY,
    SymbolKind.BOOLEAN,
    SymbolKind.NUMBER,
    SymbolKind.STRING,
    SymbolKind.CONSTANT,
    SymbolKind.TYPE_PARAMETER,
    SymbolKind.VARIABLE,
    SymbolKind.ENUM_MEMBER,
    SymbolKind.PROPERTY,
    SymbolKind.FIELD,
    SymbolKind.CONSTRUCTOR,
    SymbolKind.METHOD,
    SymbolKind.INTERFACE,
    SymbolKind.ENUM,
    SymbolKind.FUNCTION,
    SymbolKind.CLASS,
    SymbolKind.MODULE,
    SymbolKind.FILE,
    SymbolKind.NAMESPACE,
    SymbolKind.PACKAGE,
)

SPECIFICITY_RANK: dict[SymbolKind, int] = {
    kind: rank for rank, kind in enumerate(SPECIFICITY_ORDER)
}


def specificity_rank(kind: SymbolKind) -> int:
    return SPECIFICITY_RANK[kind]


def rank_symbols(symbols: list[Symbol]) -> list[Symbol]:
    """Return a copy sorted most-specific first; stable for equal kinds."""
    return sorted(symbols, key=lambda s: specificity_rank(s.kind))

"""Ordered store of symbols per file, including synthesized file and directory symbols."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from lsp_gxl.graph.identity import symbol_id
from lsp_gxl.models import Range, Symbol, SymbolKind

logger = logging.getLogger(__name__)


def file_symbol(path: Path) -> Symbol:
    """The implicit whole-file (or directory) symbol anchoring ``path`` in the containment tree."""
    return Symbol(
        kind=SymbolKind.FILE,
        name=path.name,
        file_id=path,
        range=Range.empty(),
        container_name=path.parent.name,
    )


class SymbolStore:
    """Maps file id -> symbols declared in it, in insertion order."""

    def __init__(self, root_path: Path):
        self.root_path = root_path
        self._symbols: dict[Path, list[Symbol]] = {}

    def put(self, file_id: Path, symbols: list[Symbol]) -> list[Symbol]:
        """Register ``symbols`` for ``file_id``, keeping only kinds the graph exports.

        Repeated records (same id) are kept once, first occurrence wins.
        """
        kept: list[Symbol] = []
        seen: set[str] = set()
        unexported = 0
        for symbol in symbols:
            if not symbol.is_file and symbol.node_type is None:
                unexported += 1
                continue
            sid = symbol_id(symbol)
            if sid in seen:
                logger.debug("%s: dropped duplicate symbol %s", file_id, symbol.name)
                continue
            seen.add(sid)
            kept.append(symbol)
        if unexported:
            logger.debug("%s: dropped %d symbol(s) of unexported kinds", file_id, unexported)
        self._symbols[file_id] = kept
        return kept

    def add_file_symbol(self, file_id: Path) -> Symbol:
        """Append the whole-file symbol for ``file_id`` unless one is already there."""
        symbols = self._symbols.setdefault(file_id, [])
        for symbol in symbols:
            if symbol.is_file and symbol.name == file_id.name:
                return symbol
        symbol = file_symbol(file_id)
        symbols.append(symbol)
        return symbol

    def ensure_ancestor_chain(self, file_id: Path) -> list[Symbol]:
        """Synthesize directory symbols from ``file_id``'s directory up to and including the root."""
        created: list[Symbol] = []
        for directory in file_id.parents:
            if not self.is_within_root(directory):
                break
            if directory not in self._symbols:
                symbol = file_symbol(directory)
                self._symbols[directory] = [symbol]
                created.append(symbol)
            if directory == self.root_path:
                break
        return created

    def is_within_root(self, path: Path) -> bool:
        return path == self.root_path or self.root_path in path.parents

    def get(self, file_id: Path) -> list[Symbol] | None:
        return self._symbols.get(file_id)

    def __contains__(self, file_id: Path) -> bool:
        return file_id in self._symbols

    def __iter__(self) -> Iterator[tuple[Path, list[Symbol]]]:
        return iter(self._symbols.items())

    def __len__(self) -> int:
        return len(self._symbols)

    def all_symbols(self) -> Iterator[Symbol]:
        for symbols in self._symbols.values():
            yield from symbols

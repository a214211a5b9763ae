"""Containment resolver: finds the single enclosing symbol of every stored symbol."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from lsp_gxl.graph.symbol_store import SymbolStore
from lsp_gxl.models import Symbol

logger = logging.getLogger(__name__)


@dataclass
class ContainmentResult:
    links: list[tuple[Symbol, Symbol]] = field(default_factory=list)  # (child, parent)
    unparented: list[Symbol] = field(default_factory=list)
    ambiguous_parents: list[Path] = field(default_factory=list)


class ContainmentResolver:
    """Derive ``child -> parent`` links rooted at the project root directory."""

    def __init__(self, store: SymbolStore):
        self.store = store

    def resolve(self) -> ContainmentResult:
        result = ContainmentResult()
        for file_id, symbols in self.store:
            for symbol in symbols:
                if symbol.is_file:
                    parent = self._directory_parent(symbol, result)
                else:
                    parent = self._declaration_parent(symbol, file_id, symbols)
                if parent is not None:
                    result.links.append((symbol, parent))
                elif symbol.file_id != self.store.root_path:
                    result.unparented.append(symbol)
        return result

    def _declaration_parent(
        self, symbol: Symbol, file_id: Path, symbols: list[Symbol],
    ) -> Symbol | None:
        if symbol.container_name:
            named = [c for c in symbols if c is not symbol and c.name == symbol.container_name]
            # Names can repeat within a file; only an enclosing range marks the real container.
            enclosing = [c for c in named if not c.is_file and c.range.contains(symbol.range)]
            if enclosing:
                best = enclosing[0]
                for candidate in enclosing[1:]:
                    if best.range.strictly_contains(candidate.range):
                        best = candidate
                return best
            if named:
                return named[0]
        for candidate in symbols:
            if candidate.is_file and candidate.name == file_id.name:
                return candidate
        logger.debug("No container for %s in %s", symbol.name, file_id)
        return None

    def _directory_parent(self, symbol: Symbol, result: ContainmentResult) -> Symbol | None:
        if symbol.file_id == self.store.root_path:
            return None
        parent_id = symbol.file_id.parent
        candidates = self.store.get(parent_id)
        if not candidates:
            logger.warning("No parent directory symbol for %s", symbol.file_id)
            return None
        if len(candidates) != 1 or not candidates[0].is_file:
            logger.warning(
                "Expected one directory symbol for %s, found %d (kinds: %s)",
                parent_id, len(candidates), ", ".join(c.kind.name for c in candidates),
            )
            result.ambiguous_parents.append(parent_id)
        return candidates[0]

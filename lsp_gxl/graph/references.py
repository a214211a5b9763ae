"""Reference mapper: turns raw reference locations into symbol-to-symbol dependencies."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator

from lsp_gxl.graph.identity import symbol_id
from lsp_gxl.graph.ranking import rank_symbols
from lsp_gxl.graph.symbol_store import SymbolStore
from lsp_gxl.models import Location, Range, Symbol

logger = logging.getLogger(__name__)

IgnoreFilter = Callable[[Path], bool]


class ReferenceTable:
    """Definition symbols and their raw reference locations, both keyed by symbol id."""

    def __init__(self):
        self.definitions: dict[str, Symbol] = {}
        self.locations: dict[str, list[Location]] = {}

    def record(self, definition: Symbol, locations: list[Location]) -> str:
        key = symbol_id(definition)
        self.definitions[key] = definition
        self.locations.setdefault(key, []).extend(locations)
        return key

    def items(self) -> Iterator[tuple[Symbol, list[Location]]]:
        for key, definition in self.definitions.items():
            yield definition, self.locations.get(key, [])

    def __len__(self) -> int:
        return len(self.definitions)


@dataclass
class MappingStats:
    mapped: int = 0
    ignored: int = 0
    uncollected: int = 0
    unmapped: int = 0


@dataclass
class MappingResult:
    # (referencing symbol, definition symbol), one entry per reference
    dependencies: list[tuple[Symbol, Symbol]] = field(default_factory=list)
    stats: MappingStats = field(default_factory=MappingStats)


def smallest_enclosing(symbols: list[Symbol], target: Range) -> Symbol | None:
    """Most specific symbol whose range contains ``target``.

    Candidates are visited in specificity order; a later candidate only wins
    when its range lies strictly inside the current pick, so a larger
    ancestor is never chosen over a nested declaration.
    """
    best: Symbol | None = None
    for symbol in rank_symbols(symbols):
        if not symbol.range.contains(target):
            continue
        if best is None or best.range.strictly_contains(symbol.range):
            best = symbol
    return best


class ReferenceMapper:
    """Map every recorded reference to the symbol it occurs in.

    Runs only once the store holds every collected file.
    """

    def __init__(self, store: SymbolStore, is_ignored: IgnoreFilter | None = None):
        self.store = store
        self.is_ignored = is_ignored or (lambda path: False)

    def map(self, table: ReferenceTable) -> MappingResult:
        result = MappingResult()
        for definition, locations in table.items():
            for location in locations:
                referencing = self._referencing_symbol(definition, location, result.stats)
                if referencing is not None:
                    result.dependencies.append((referencing, definition))
                    result.stats.mapped += 1
        logger.info(
            "Mapped %d reference(s); %d unmapped, %d ignored, %d outside collected files",
            result.stats.mapped, result.stats.unmapped,
            result.stats.ignored, result.stats.uncollected,
        )
        return result

    def _referencing_symbol(
        self, definition: Symbol, location: Location, stats: MappingStats,
    ) -> Symbol | None:
        if self.is_ignored(location.file_id):
            stats.ignored += 1
            logger.debug("Skipping reference to %s in ignored file %s", definition.name, location.file_id)
            return None
        symbols = self.store.get(location.file_id)
        if symbols is None:
            stats.uncollected += 1
            logger.debug("Skipping reference to %s in uncollected file %s", definition.name, location.file_id)
            return None
        referencing = smallest_enclosing(symbols, location.range)
        if referencing is None:
            stats.unmapped += 1
            logger.warning(
                "Reference to %s at %s:%d:%d was not within any symbol",
                definition.name, location.file_id,
                location.range.start.line, location.range.start.character,
            )
            return None
        logger.debug("Mapped reference from %s to %s", referencing.name, definition.name)
        return referencing

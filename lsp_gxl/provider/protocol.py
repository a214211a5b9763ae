"""Wire models for language-server symbol and reference payloads."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urlparse
from urllib.request import url2pathname

from pydantic import BaseModel, Field

from lsp_gxl.models import Location, Position, Range, Symbol, SymbolKind

logger = logging.getLogger(__name__)

_KNOWN_KINDS = {int(kind) for kind in SymbolKind}


class LspPosition(BaseModel):
    line: int
    character: int

    def to_position(self) -> Position:
        return Position(self.line, self.character)


class LspRange(BaseModel):
    start: LspPosition
    end: LspPosition

    def to_range(self) -> Range:
        return Range(self.start.to_position(), self.end.to_position())


class LspLocation(BaseModel):
    uri: str
    range: LspRange

    def to_location(self) -> Location:
        return Location(file_id=uri_to_path(self.uri), range=self.range.to_range())


class LspSymbolInformation(BaseModel):
    """Flat symbol entry; nesting is expressed through ``containerName``."""
    name: str
    kind: int
    location: LspLocation
    container_name: Optional[str] = Field(default=None, alias="containerName")


class LspDocumentSymbol(BaseModel):
    """Hierarchical symbol entry; nesting is expressed through ``children``."""
    name: str
    kind: int
    range: LspRange
    selection_range: Optional[LspRange] = Field(default=None, alias="selectionRange")
    children: list[LspDocumentSymbol] = Field(default_factory=list)


LspDocumentSymbol.model_rebuild()


def uri_to_path(uri: str) -> Path:
    parsed = urlparse(uri)
    if parsed.scheme not in ("", "file"):
        raise ValueError(f"Unsupported URI scheme: {uri}")
    return Path(url2pathname(parsed.path))


def path_to_uri(path: Path) -> str:
    return path.absolute().as_uri()


def _to_kind(value: int, name: str) -> SymbolKind | None:
    if value not in _KNOWN_KINDS:
        logger.debug("Dropping symbol %s of unknown kind %d", name, value)
        return None
    return SymbolKind(value)


def _flatten(
    entry: LspDocumentSymbol, file_id: Path, container: str | None, out: list[Symbol],
) -> None:
    kind = _to_kind(entry.kind, entry.name)
    if kind is not None:
        out.append(Symbol(
            kind=kind,
            name=entry.name,
            file_id=file_id,
            range=entry.range.to_range(),
            container_name=container,
            selection_range=entry.selection_range.to_range() if entry.selection_range else None,
        ))
    for child in entry.children:
        _flatten(child, file_id, entry.name, out)


def parse_document_symbols(payload: list[dict[str, Any]] | None, file_id: Path) -> list[Symbol]:
    """Convert a ``textDocument/documentSymbol`` result into flat ``Symbol`` records.

    Both result shapes are accepted. ``DocumentSymbol`` trees are flattened
    depth-first with each child's container set to its parent's name.
    """
    symbols: list[Symbol] = []
    for item in payload or []:
        if "location" in item:
            info = LspSymbolInformation.model_validate(item)
            kind = _to_kind(info.kind, info.name)
            if kind is None:
                continue
            symbols.append(Symbol(
                kind=kind,
                name=info.name,
                file_id=file_id,
                range=info.location.range.to_range(),
                container_name=info.container_name,
            ))
        else:
            _flatten(LspDocumentSymbol.model_validate(item), file_id, None, symbols)
    return symbols


def parse_locations(payload: list[dict[str, Any]] | None) -> list[Location]:
    return [LspLocation.model_validate(item).to_location() for item in payload or []]

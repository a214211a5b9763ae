"""Deterministic ids for graph nodes and edges."""

from __future__ import annotations

import hashlib
import json

from lsp_gxl.models import EdgeType, Range, Symbol

_DIGEST_LENGTH = 16


def _range_record(r: Range | None) -> list[int] | None:
    if r is None:
        return None
    return [r.start.line, r.start.character, r.end.line, r.end.character]


def symbol_record(symbol: Symbol) -> dict:
    """The full symbol record that feeds the content hash."""
    return {
        "kind": int(symbol.kind),
        "name": symbol.name,
        "container": symbol.container_name,
        "file": symbol.file_id.as_posix(),
        "range": _range_record(symbol.range),
        "selection": _range_record(symbol.selection_range),
    }


def content_hash(payload) -> str:
    encoded = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
    return hashlib.sha1(encoded).hexdigest()[:_DIGEST_LENGTH]


def symbol_id(symbol: Symbol) -> str:
    """``<NodeType>:<kind>:<name>:<hash>``; equal records always give equal ids."""
    node_type = symbol.node_type
    type_tag = node_type.value if node_type else "None"
    return f"{type_tag}:{symbol.kind.name.lower()}:{symbol.name}:{content_hash(symbol_record(symbol))}"


def edge_id(source: str, target: str, edge_type: EdgeType, ordinal: int = 0) -> str:
    """Edge ids depend only on endpoints, type and how many identical edges came first."""
    digest = content_hash([source, target, edge_type.value])
    return f"{edge_type.value}:{digest}:{ordinal}"

"""Data models for the symbol graph."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from lsp_gxl.graph.identity import content_hash, edge_id, symbol_id
from lsp_gxl.models import EdgeType, NodeType, Symbol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GraphNode:
    id: str
    node_type: NodeType
    name: str
    line: int
    column: int
    path: str  # relative to the project root

    @classmethod
    def from_symbol(cls, symbol: Symbol, root_path: Path) -> GraphNode:
        node_type = symbol.node_type
        if node_type is None:
            raise ValueError(f"Symbol kind {symbol.kind.name} is not exported to the graph")
        return cls(
            id=symbol_id(symbol),
            node_type=node_type,
            name=symbol.name,
            line=symbol.range.start.line,
            column=symbol.range.start.character,
            path=relative_path(symbol.file_id, root_path),
        )


@dataclass(frozen=True)
class GraphEdge:
    id: str
    source: str
    target: str
    edge_type: EdgeType


@dataclass
class GraphModel:
    nodes: dict[str, GraphNode] = field(default_factory=dict)
    edges: list[GraphEdge] = field(default_factory=list)
    dangling: list[tuple[str, str]] = field(default_factory=list)
    _triples: dict[tuple[str, str, EdgeType], int] = field(default_factory=dict, repr=False)

    def add_node(self, node: GraphNode) -> GraphNode:
        """Insert ``node`` unless a node with the same id exists; return the stored one."""
        existing = self.nodes.get(node.id)
        if existing is not None:
            return existing
        self.nodes[node.id] = node
        return node

    def add_edge(self, source: str, target: str, edge_type: EdgeType) -> GraphEdge:
        """Append an edge. Parallel edges are kept and numbered."""
        key = (source, target, edge_type)
        ordinal = self._triples.get(key, 0)
        self._triples[key] = ordinal + 1
        edge = GraphEdge(
            id=edge_id(source, target, edge_type, ordinal),
            source=source,
            target=target,
            edge_type=edge_type,
        )
        self.edges.append(edge)
        return edge

    def edges_of_type(self, edge_type: EdgeType) -> list[GraphEdge]:
        return [e for e in self.edges if e.edge_type == edge_type]

    def validate(self) -> list[tuple[str, str]]:
        """Report edge endpoints missing from the node set as ``(edge_id, node_id)`` pairs."""
        dangling: list[tuple[str, str]] = []
        for edge in self.edges:
            for endpoint in (edge.source, edge.target):
                if endpoint not in self.nodes:
                    logger.warning(
                        "%s edge %s points at unknown node %s",
                        edge.edge_type.value, edge.id, endpoint,
                    )
                    dangling.append((edge.id, endpoint))
        self.dangling = dangling
        return dangling

    @property
    def run_id(self) -> str:
        return content_hash([list(self.nodes), [e.id for e in self.edges]])


def relative_path(path: Path, root_path: Path) -> str:
    try:
        return path.relative_to(root_path).as_posix()
    except ValueError:
        return Path(os.path.relpath(path, root_path)).as_posix()

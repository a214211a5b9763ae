"""Symbol graph builder: nodes from the store plus containment and reference edges."""

from __future__ import annotations

import logging

from lsp_gxl.graph.containment import ContainmentResolver
from lsp_gxl.graph.graph_models import GraphModel, GraphNode
from lsp_gxl.graph.identity import symbol_id
from lsp_gxl.graph.references import IgnoreFilter, ReferenceMapper, ReferenceTable
from lsp_gxl.graph.symbol_store import SymbolStore
from lsp_gxl.models import EdgeType, Symbol

logger = logging.getLogger(__name__)


class SymbolGraphBuilder:
    """Build a graph from a completed symbol store and reference table."""

    def __init__(self, is_ignored: IgnoreFilter | None = None):
        self.is_ignored = is_ignored

    def build(self, store: SymbolStore, references: ReferenceTable | None = None) -> GraphModel:
        graph = GraphModel()

        # Step 1: one node per exported symbol, in store order
        for symbol in store.all_symbols():
            if symbol.node_type is None:
                continue
            graph.add_node(GraphNode.from_symbol(symbol, store.root_path))

        # Step 2: containment
        containment = ContainmentResolver(store).resolve()
        for child, parent in containment.links:
            self._add_edge(graph, child, parent, EdgeType.ENCLOSING)

        # Step 3: references
        if references is not None:
            mapping = ReferenceMapper(store, self.is_ignored).map(references)
            for referencing, definition in mapping.dependencies:
                self._add_edge(graph, referencing, definition, EdgeType.SOURCE_DEPENDENCY)

        logger.info("Built graph with %d node(s) and %d edge(s)", len(graph.nodes), len(graph.edges))
        return graph

    @staticmethod
    def _add_edge(graph: GraphModel, source: Symbol, target: Symbol, edge_type: EdgeType) -> None:
        if source.node_type is None or target.node_type is None:
            logger.debug(
                "Dropping %s edge %s -> %s: endpoint kind not exported",
                edge_type.value, source.name, target.name,
            )
            return
        graph.add_edge(symbol_id(source), symbol_id(target), edge_type)

"""Symbol graph layer."""

from lsp_gxl.graph.anchors import AnchorPolicy
from lsp_gxl.graph.builder import SymbolGraphBuilder
from lsp_gxl.graph.containment import ContainmentResolver
from lsp_gxl.graph.graph_models import GraphEdge, GraphModel, GraphNode
from lsp_gxl.graph.references import ReferenceMapper, ReferenceTable
from lsp_gxl.graph.symbol_store import SymbolStore

__all__ = [
    "AnchorPolicy",
    "ContainmentResolver",
    "GraphEdge",
    "GraphModel",
    "GraphNode",
    "ReferenceMapper",
    "ReferenceTable",
    "SymbolGraphBuilder",
    "SymbolStore",
]

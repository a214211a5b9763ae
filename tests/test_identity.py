"""Tests for node and edge identity."""

from pathlib import Path

from lsp_gxl.graph.identity import edge_id, symbol_id
from lsp_gxl.models import EdgeType, Position, Range, Symbol, SymbolKind


def _symbol(name="foo", kind=SymbolKind.FUNCTION, line=0, container=None, file="/p/a.py"):
    return Symbol(
        kind=kind, name=name, file_id=Path(file),
        range=Range(Position(line, 0), Position(line + 2, 0)),
        container_name=container,
    )


class TestSymbolId:
    def test_equal_records_equal_ids(self):
        assert symbol_id(_symbol()) == symbol_id(_symbol())

    def test_prefix_carries_type_kind_and_name(self):
        assert symbol_id(_symbol()).startswith("Routine:function:foo:")
        assert symbol_id(_symbol("x", SymbolKind.PROPERTY)).startswith("Member:property:x:")

    def test_structurally_distinct_symbols_differ(self):
        base = symbol_id(_symbol())
        assert symbol_id(_symbol(line=5)) != base
        assert symbol_id(_symbol(container="Outer")) != base
        assert symbol_id(_symbol(file="/p/b.py")) != base
        assert symbol_id(_symbol(kind=SymbolKind.METHOD)) != base

    def test_same_name_in_two_files(self):
        a = _symbol("__init__", SymbolKind.METHOD, file="/p/a.py")
        b = _symbol("__init__", SymbolKind.METHOD, file="/p/b.py")
        assert symbol_id(a) != symbol_id(b)


class TestEdgeId:
    def test_deterministic(self):
        assert edge_id("a", "b", EdgeType.ENCLOSING) == edge_id("a", "b", EdgeType.ENCLOSING)

    def test_type_and_direction_matter(self):
        ids = {
            edge_id("a", "b", EdgeType.ENCLOSING),
            edge_id("b", "a", EdgeType.ENCLOSING),
            edge_id("a", "b", EdgeType.SOURCE_DEPENDENCY),
        }
        assert len(ids) == 3

    def test_ordinal_distinguishes_parallel_edges(self):
        first = edge_id("a", "b", EdgeType.SOURCE_DEPENDENCY, 0)
        second = edge_id("a", "b", EdgeType.SOURCE_DEPENDENCY, 1)
        assert first != second
        assert first.startswith("Source_Dependency:")
        assert second.endswith(":1")

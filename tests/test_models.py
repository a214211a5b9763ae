"""Tests for the core data models."""

from pathlib import Path

from lsp_gxl.models import (
    GraphConfig, NodeType, Position, Range, Symbol, SymbolKind, node_type_for,
)


def _range(sl, sc, el, ec):
    return Range(Position(sl, sc), Position(el, ec))


class TestRange:
    def test_contains_inner(self):
        assert _range(1, 0, 10, 0).contains(_range(2, 4, 2, 8))

    def test_contains_equal_bounds(self):
        r = _range(1, 0, 3, 5)
        assert r.contains(_range(1, 0, 3, 5))
        assert not r.strictly_contains(_range(1, 0, 3, 5))

    def test_contains_same_line_columns(self):
        r = _range(4, 4, 4, 10)
        assert r.contains(_range(4, 4, 4, 5))
        assert not r.contains(_range(4, 3, 4, 5))
        assert not r.contains(_range(4, 9, 4, 11))

    def test_partial_overlap_not_contained(self):
        assert not _range(1, 0, 5, 0).contains(_range(4, 0, 6, 0))

    def test_position_ordering(self):
        assert Position(1, 9) < Position(2, 0)
        assert Position(2, 1) > Position(2, 0)


class TestSymbol:
    def test_anchor_prefers_selection_range(self):
        s = Symbol(
            kind=SymbolKind.CLASS, name="Foo", file_id=Path("/p/a.py"),
            range=_range(0, 0, 5, 0), selection_range=_range(0, 6, 0, 9),
        )
        assert s.anchor == Position(0, 6)

    def test_anchor_falls_back_to_range(self):
        s = Symbol(kind=SymbolKind.CLASS, name="Foo", file_id=Path("/p/a.py"), range=_range(3, 2, 5, 0))
        assert s.anchor == Position(3, 2)

    def test_node_type(self):
        s = Symbol(kind=SymbolKind.PROPERTY, name="x", file_id=Path("/p/a.py"), range=Range.empty())
        assert s.node_type == NodeType.MEMBER

    def test_symbols_are_hashable_values(self):
        a = Symbol(kind=SymbolKind.FUNCTION, name="f", file_id=Path("/p/a.py"), range=_range(0, 0, 1, 0))
        b = Symbol(kind=SymbolKind.FUNCTION, name="f", file_id=Path("/p/a.py"), range=_range(0, 0, 1, 0))
        assert a == b
        assert len({a, b}) == 1


class TestKindTable:
    def test_exported_kinds(self):
        assert node_type_for(SymbolKind.FILE) == NodeType.FILE
        assert node_type_for(SymbolKind.MODULE) == NodeType.FILE
        assert node_type_for(SymbolKind.CLASS) == NodeType.CLASS
        assert node_type_for(SymbolKind.FIELD) == NodeType.MEMBER
        assert node_type_for(SymbolKind.METHOD) == NodeType.METHOD
        assert node_type_for(SymbolKind.FUNCTION) == NodeType.ROUTINE

    def test_other_kinds_excluded(self):
        for kind in (SymbolKind.VARIABLE, SymbolKind.INTERFACE, SymbolKind.CONSTRUCTOR, SymbolKind.NAMESPACE):
            assert node_type_for(kind) is None


class TestGraphConfig:
    def test_root_path_resolved(self, tmp_path):
        config = GraphConfig(root_path=tmp_path / "." / "x" / "..")
        assert config.root_path == tmp_path.resolve()

    def test_env_fallbacks(self, monkeypatch):
        monkeypatch.setenv("LSP_GXL_FILE_PATTERN", "**/*.ts")
        monkeypatch.setenv("LSP_GXL_LOG_LEVEL", "debug")
        config = GraphConfig()
        assert config.file_pattern == "**/*.ts"
        assert config.log_level == "DEBUG"

    def test_explicit_values_win(self, monkeypatch):
        monkeypatch.setenv("LSP_GXL_FILE_PATTERN", "**/*.ts")
        monkeypatch.setenv("LSP_GXL_LOG_LEVEL", "debug")
        config = GraphConfig(file_pattern="**/*.py", log_level="warning")
        assert config.file_pattern == "**/*.py"
        assert config.log_level == "WARNING"

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("LSP_GXL_FILE_PATTERN", raising=False)
        monkeypatch.delenv("LSP_GXL_LOG_LEVEL", raising=False)
        config = GraphConfig()
        assert config.file_pattern is None
        assert config.log_level == "INFO"
        assert config.include_references

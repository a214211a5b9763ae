"""Tests for the provider wire models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from lsp_gxl.models import Position, Range, SymbolKind
from lsp_gxl.provider.protocol import (
    parse_document_symbols, parse_locations, path_to_uri, uri_to_path,
)

FILE = Path("/work/project/pkg/a.py")


def _lsp_range(sl, sc, el, ec):
    return {"start": {"line": sl, "character": sc}, "end": {"line": el, "character": ec}}


class TestSymbolInformation:
    def test_flat_list(self):
        payload = [
            {"name": "Foo", "kind": 5, "location": {"uri": path_to_uri(FILE), "range": _lsp_range(0, 0, 4, 0)}},
            {"name": "run", "kind": 6, "containerName": "Foo",
             "location": {"uri": path_to_uri(FILE), "range": _lsp_range(1, 4, 3, 0)}},
        ]
        symbols = parse_document_symbols(payload, FILE)
        assert [(s.name, s.kind, s.container_name) for s in symbols] == [
            ("Foo", SymbolKind.CLASS, None),
            ("run", SymbolKind.METHOD, "Foo"),
        ]
        assert symbols[1].range == Range(Position(1, 4), Position(3, 0))
        assert symbols[1].selection_range is None
        assert all(s.file_id == FILE for s in symbols)


class TestDocumentSymbol:
    def test_tree_is_flattened_with_containers(self):
        payload = [{
            "name": "Foo", "kind": 5,
            "range": _lsp_range(0, 0, 10, 0), "selectionRange": _lsp_range(0, 6, 0, 9),
            "children": [
                {"name": "run", "kind": 6, "range": _lsp_range(1, 4, 4, 0),
                 "selectionRange": _lsp_range(1, 8, 1, 11),
                 "children": [{"name": "inner", "kind": 12, "range": _lsp_range(2, 8, 3, 0),
                               "selectionRange": _lsp_range(2, 12, 2, 17)}]},
                {"name": "x", "kind": 8, "range": _lsp_range(5, 4, 5, 9),
                 "selectionRange": _lsp_range(5, 4, 5, 5)},
            ],
        }]
        symbols = parse_document_symbols(payload, FILE)
        assert [(s.name, s.container_name) for s in symbols] == [
            ("Foo", None), ("run", "Foo"), ("inner", "run"), ("x", "Foo"),
        ]
        assert symbols[0].selection_range == Range(Position(0, 6), Position(0, 9))

    def test_unknown_kind_dropped_but_children_kept(self):
        payload = [{
            "name": "weird", "kind": 99, "range": _lsp_range(0, 0, 5, 0),
            "children": [{"name": "f", "kind": 12, "range": _lsp_range(1, 0, 2, 0)}],
        }]
        symbols = parse_document_symbols(payload, FILE)
        assert [(s.name, s.container_name) for s in symbols] == [("f", "weird")]

    def test_null_result(self):
        assert parse_document_symbols(None, FILE) == []

    def test_malformed_payload(self):
        with pytest.raises(ValidationError):
            parse_document_symbols([{"name": "Foo", "kind": "class"}], FILE)


class TestLocations:
    def test_parse(self):
        locations = parse_locations([{"uri": path_to_uri(FILE), "range": _lsp_range(4, 11, 4, 14)}])
        assert locations[0].file_id == FILE
        assert locations[0].range == Range(Position(4, 11), Position(4, 14))

    def test_null(self):
        assert parse_locations(None) == []


class TestUris:
    def test_round_trip_with_escapes(self):
        path = Path("/work/my project/a b.py")
        uri = path_to_uri(path)
        assert uri == "file:///work/my%20project/a%20b.py"
        assert uri_to_path(uri) == path

    def test_non_file_scheme_rejected(self):
        with pytest.raises(ValueError):
            uri_to_path("untitled:Untitled-1")

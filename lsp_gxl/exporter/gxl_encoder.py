"""Serialize a GraphModel to a GXL document."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path

from lsp_gxl.graph.graph_models import GraphEdge, GraphModel, GraphNode

logger = logging.getLogger(__name__)

XLINK_NS = "http://www.w3.org/1999/xlink"
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'

NODE_ATTRIBUTES = ("Source.Name", "Source.Line", "Source.Column", "Source.Path")

# Characters outside the XML 1.0 Char production
_ILLEGAL_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class GxlEncodingError(ValueError):
    """A node attribute is missing or cannot be represented in GXL."""


def node_attributes(node: GraphNode) -> dict[str, object]:
    return {
        "Source.Name": node.name,
        "Source.Line": node.line,
        "Source.Column": node.column,
        "Source.Path": node.path,
    }


def _value_tag(name: str, value: object) -> str:
    # bool is an int subclass but has no GXL rendition here
    if isinstance(value, bool):
        raise GxlEncodingError(f"Attribute {name!r} has unsupported type bool")
    if isinstance(value, int):
        return "int"
    if isinstance(value, str):
        _check_text(name, value)
        return "string"
    raise GxlEncodingError(f"Attribute {name!r} has unsupported type {type(value).__name__}")


def _check_text(name: str, value: str) -> None:
    match = _ILLEGAL_XML_CHARS.search(value)
    if match:
        raise GxlEncodingError(
            f"{name} value {value!r} contains character {match.group()!r} not allowed in XML"
        )


def _type_element(parent: ET.Element, type_name: str) -> ET.Element:
    return ET.SubElement(parent, "type", {"xlink:href": type_name})


def _node_element(parent: ET.Element, node: GraphNode) -> ET.Element:
    _check_text("Node id", node.id)
    element = ET.SubElement(parent, "node", {"id": node.id})
    _type_element(element, node.node_type.value)
    attrs = node_attributes(node)
    for name in NODE_ATTRIBUTES:
        value = attrs.get(name)
        if value is None:
            raise GxlEncodingError(f"Node {node.id} is missing attribute {name!r}")
        attr = ET.SubElement(element, "attr", {"name": name})
        ET.SubElement(attr, _value_tag(name, value)).text = str(value)
    return element


def _edge_element(parent: ET.Element, edge: GraphEdge) -> ET.Element:
    for name, value in (("Edge id", edge.id), ("Edge source", edge.source), ("Edge target", edge.target)):
        _check_text(name, value)
    element = ET.SubElement(
        parent, "edge", {"from": edge.source, "to": edge.target, "id": edge.id},
    )
    _type_element(element, edge.edge_type.value)
    return element


def encode_gxl(graph: GraphModel, graph_id: str | None = None) -> str:
    """Render ``graph`` as a pretty-printed GXL document, nodes then edges, in insertion order."""
    root = ET.Element("gxl", {"xmlns:xlink": XLINK_NS})
    graph_element = ET.SubElement(root, "graph", {"id": graph_id or graph.run_id})
    for node in graph.nodes.values():
        _node_element(graph_element, node)
    for edge in graph.edges:
        _edge_element(graph_element, edge)
    ET.indent(root, space="  ")
    return XML_DECLARATION + "\n" + ET.tostring(root, encoding="unicode") + "\n"


def write_gxl(graph: GraphModel, out_file: Path, graph_id: str | None = None) -> Path:
    """Encode ``graph`` and write it to ``out_file`` as UTF-8."""
    document = encode_gxl(graph, graph_id)
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(document, encoding="utf-8")
    logger.info("Wrote %d node(s) and %d edge(s) to %s", len(graph.nodes), len(graph.edges), out_file)
    return out_file

"""Exporter layer."""

from lsp_gxl.exporter.gxl_encoder import GxlEncodingError, encode_gxl, write_gxl

__all__ = ["GxlEncodingError", "encode_gxl", "write_gxl"]

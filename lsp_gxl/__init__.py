"""lsp-gxl: build a content-addressed symbol dependency graph from a language server and export it as GXL."""

__version__ = "0.1.0"

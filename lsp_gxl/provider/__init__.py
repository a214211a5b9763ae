"""Provider layer: the language-server client and file discovery."""

from lsp_gxl.provider.base import BaseProvider, ProviderError
from lsp_gxl.provider.discovery import discover_files, is_ignored
from lsp_gxl.provider.lsp_provider import JsonRpcConnection, LspProvider

__all__ = [
    "BaseProvider",
    "JsonRpcConnection",
    "LspProvider",
    "ProviderError",
    "discover_files",
    "is_ignored",
]

"""Abstract code-intelligence provider."""

from __future__ import annotations

import abc
from pathlib import Path

from lsp_gxl.models import Location, Position, Symbol


class ProviderError(RuntimeError):
    """The provider failed or the connection to it broke. Fatal for the run."""


class BaseProvider(abc.ABC):
    """Supplies per-file symbols and per-position references."""

    @abc.abstractmethod
    def get_symbols(self, file_id: Path) -> list[Symbol]:
        """Symbols declared in ``file_id``; may be empty."""

    @abc.abstractmethod
    def get_references(self, file_id: Path, position: Position) -> list[Location]:
        """Locations referencing the symbol at ``position``; may be empty."""

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

"""Language-server provider: JSON-RPC over the stdio of a spawned server process.

Requests are strictly sequential. Each request blocks until the matching
response arrives; notifications received meanwhile are skipped and
server-to-client requests get an empty answer so the server never stalls.
"""

from __future__ import annotations

import json
import logging
import os
import subprocess
from pathlib import Path
from typing import Any, BinaryIO

from pydantic import ValidationError

from lsp_gxl.models import Location, Position, Symbol
from lsp_gxl.provider.base import BaseProvider, ProviderError
from lsp_gxl.provider.language_map import language_id_for
from lsp_gxl.provider.protocol import parse_document_symbols, parse_locations, path_to_uri

logger = logging.getLogger(__name__)


class JsonRpcConnection:
    """Content-Length framed JSON-RPC 2.0 over a pair of byte streams."""

    def __init__(self, reader: BinaryIO, writer: BinaryIO):
        self._reader = reader
        self._writer = writer
        self._next_id = 0

    def notify(self, method: str, params: Any) -> None:
        self._send({"jsonrpc": "2.0", "method": method, "params": params})

    def request(self, method: str, params: Any) -> Any:
        request_id = self._next_id
        self._next_id += 1
        self._send({"jsonrpc": "2.0", "id": request_id, "method": method, "params": params})

        while True:
            message = self._read_message()
            if "method" in message:
                self._handle_server_message(message)
                continue
            if message.get("id") != request_id:
                logger.debug("Ignoring response to unknown request %r", message.get("id"))
                continue
            error = message.get("error")
            if error is not None:
                raise ProviderError(
                    f"{method} failed: {error.get('message', 'unknown error')} (code {error.get('code')})"
                )
            return message.get("result")

    def _handle_server_message(self, message: dict[str, Any]) -> None:
        method = message["method"]
        if "id" not in message:
            logger.debug("Notification from server: %s", method)
            return
        result: Any = None
        if method == "workspace/configuration":
            items = (message.get("params") or {}).get("items") or []
            result = [None] * len(items)
        logger.debug("Answering server request %s", method)
        self._send({"jsonrpc": "2.0", "id": message["id"], "result": result})

    def _send(self, payload: dict[str, Any]) -> None:
        content = json.dumps(payload).encode("utf-8")
        header = f"Content-Length: {len(content)}\r\n\r\n".encode("ascii")
        logger.debug("--> %s", payload.get("method", payload.get("id")))
        try:
            self._writer.write(header + content)
            self._writer.flush()
        except (BrokenPipeError, OSError) as e:
            raise ProviderError(f"Lost connection to language server: {e}") from e

    def _read_message(self) -> dict[str, Any]:
        headers: dict[str, str] = {}
        while True:
            line = self._reader.readline()
            if not line:
                raise ProviderError("Language server closed the connection")
            line = line.strip()
            if not line:
                if headers:
                    break
                continue
            name, _, value = line.decode("ascii", errors="replace").partition(":")
            headers[name.strip().lower()] = value.strip()

        try:
            length = int(headers["content-length"])
        except (KeyError, ValueError) as e:
            raise ProviderError(f"Malformed message header: {headers!r}") from e

        body = self._reader.read(length)
        if len(body) < length:
            raise ProviderError("Language server closed the connection mid-message")
        try:
            message = json.loads(body.decode("utf-8"))
        except ValueError as e:
            raise ProviderError(f"Malformed message body: {e}") from e
        if not isinstance(message, dict):
            raise ProviderError(f"Unexpected message: {message!r}")
        return message


class LspProvider(BaseProvider):
    """Provider backed by a language server started from ``command``."""

    def __init__(
        self,
        command: list[str],
        root_path: Path,
        open_documents: bool = True,
        connection: JsonRpcConnection | None = None,
    ):
        self.command = command
        self.root_path = root_path
        self.open_documents = open_documents
        self._connection = connection
        self._process: subprocess.Popen | None = None
        self._opened: set[Path] = set()
        self._initialized = False

    def start(self) -> dict[str, Any]:
        """Spawn the server (unless a connection was injected) and run the initialize handshake."""
        if self._connection is None:
            if not self.command:
                raise ProviderError("No language server command given")
            logger.info("Executing language server %s", " ".join(self.command))
            try:
                self._process = subprocess.Popen(
                    self.command,
                    stdin=subprocess.PIPE,
                    stdout=subprocess.PIPE,
                    cwd=self.root_path,
                )
            except FileNotFoundError as e:
                raise ProviderError(f"Language server not found: {self.command[0]}") from e
            self._connection = JsonRpcConnection(self._process.stdout, self._process.stdin)

        init_params = {
            "processId": os.getpid(),
            "rootPath": str(self.root_path),
            "rootUri": path_to_uri(self.root_path),
            "workspaceFolders": None,
            "capabilities": {
                "textDocument": {
                    "documentSymbol": {"hierarchicalDocumentSymbolSupport": True},
                    "references": {},
                },
            },
        }
        result = self._connection.request("initialize", init_params) or {}
        logger.debug("Initialize result: %s", result)
        self._connection.notify("initialized", {})
        self._initialized = True
        return result

    def _ensure_started(self) -> JsonRpcConnection:
        if not self._initialized:
            self.start()
        assert self._connection is not None
        return self._connection

    def _ensure_opened(self, file_id: Path) -> None:
        if not self.open_documents or file_id in self._opened:
            return
        try:
            text = file_id.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise ProviderError(f"Cannot open {file_id} for the language server: {e}") from e
        self._ensure_started().notify("textDocument/didOpen", {
            "textDocument": {
                "uri": path_to_uri(file_id),
                "languageId": language_id_for(file_id),
                "version": 1,
                "text": text,
            },
        })
        self._opened.add(file_id)

    def get_symbols(self, file_id: Path) -> list[Symbol]:
        connection = self._ensure_started()
        self._ensure_opened(file_id)
        result = connection.request(
            "textDocument/documentSymbol",
            {"textDocument": {"uri": path_to_uri(file_id)}},
        )
        try:
            return parse_document_symbols(result, file_id)
        except ValidationError as e:
            raise ProviderError(f"Malformed symbols for {file_id}: {e}") from e

    def get_references(self, file_id: Path, position: Position) -> list[Location]:
        connection = self._ensure_started()
        result = connection.request("textDocument/references", {
            "textDocument": {"uri": path_to_uri(file_id)},
            "position": {"line": position.line, "character": position.character},
            "context": {"includeDeclaration": False},
        })
        try:
            return parse_locations(result)
        except (ValidationError, ValueError) as e:
            raise ProviderError(f"Malformed references for {file_id}: {e}") from e

    def close(self) -> None:
        if self._connection is not None and self._initialized:
            try:
                self._connection.request("shutdown", None)
                self._connection.notify("exit", None)
            except ProviderError as e:
                logger.warning("Language server did not shut down cleanly: %s", e)
            self._initialized = False
        if self._process is not None:
            try:
                self._process.wait(timeout=5)
            except subprocess.TimeoutExpired:
                self._process.kill()
                self._process.wait()
            self._process = None

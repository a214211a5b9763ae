"""Extension-to-language-id mapping used when opening documents on the server."""

from __future__ import annotations

from pathlib import Path

EXT_TO_LANGUAGE_ID: dict[str, str] = {
    ".py": "python",
    ".pyi": "python",
    ".js": "javascript",
    ".jsx": "javascriptreact",
    ".mjs": "javascript",
    ".ts": "typescript",
    ".tsx": "typescriptreact",
    ".dart": "dart",
    ".rs": "rust",
    ".go": "go",
    ".java": "java",
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".cxx": "cpp",
    ".hpp": "cpp",
    ".rb": "ruby",
    ".swift": "swift",
    ".kt": "kotlin",
    ".kts": "kotlin",
    ".cs": "csharp",
    ".php": "php",
    ".sql": "sql",
}


def language_id_for(path: Path) -> str:
    return EXT_TO_LANGUAGE_ID.get(path.suffix.lower(), "plaintext")

"""Where to ask the provider for references of a symbol, and when not to ask at all."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from lsp_gxl.models import Position, Symbol

DEFAULT_IMPORT_PATTERN = r"\bimport\b|^\s*#\s*include\b"
DEFAULT_DECLARATION_KEYWORDS: tuple[str, ...] = ("async def", "def", "class")


@dataclass
class AnchorPolicy:
    """Line-text heuristics applied on top of the provider's selection range.

    When the provider reports a ``selectionRange`` the anchor already sits on
    the identifier and the keyword rule does not fire. Only ranges that start
    at a declaration keyword get moved past ``<keyword><separator>``.
    """
    import_pattern: str = DEFAULT_IMPORT_PATTERN
    declaration_keywords: tuple[str, ...] = DEFAULT_DECLARATION_KEYWORDS
    _import_re: re.Pattern = field(init=False, repr=False)

    def __post_init__(self):
        self._import_re = re.compile(self.import_pattern)
        # Longest first so "async def" wins over "def".
        self.declaration_keywords = tuple(
            sorted(self.declaration_keywords, key=len, reverse=True)
        )

    def is_import_line(self, line_text: str) -> bool:
        return bool(self._import_re.search(line_text))

    def adjust(self, position: Position, line_text: str) -> Position:
        rest = line_text[position.character:]
        for keyword in self.declaration_keywords:
            if rest.startswith(keyword) and len(rest) > len(keyword) and not _is_identifier_char(rest[len(keyword)]):
                return position.shifted(len(keyword) + 1)
        return position

    def anchor_for(self, symbol: Symbol, lines: list[str]) -> Position | None:
        """Query position for ``symbol``, or None when no reference query should be issued."""
        position = symbol.anchor
        line_text = lines[position.line] if 0 <= position.line < len(lines) else ""
        if self.is_import_line(line_text):
            return None
        return self.adjust(position, line_text)


def _is_identifier_char(char: str) -> bool:
    return char.isalnum() or char == "_"

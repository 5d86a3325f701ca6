"""
Append-only text builder for generated code.

Indentation is tracked here so renderers only state relative nesting.
"""

import textwrap
from contextlib import contextmanager
from typing import List


class CodeBuilder:
    """Collects lines of code as chunks and joins them once at the end."""

    def __init__(self, indent_unit: str = "    ", depth: int = 0):
        """
        Initialize builder.

        Args:
            indent_unit: Text for one indentation level
            depth: Base indentation level of every emitted line
        """
        self.indent_unit = indent_unit
        self.depth = depth
        self._chunks: List[str] = []

    def line(self, text: str = "", offset: int = 0) -> "CodeBuilder":
        """Append one line at the current depth plus ``offset`` levels."""
        if text:
            self._chunks.append(self.indent_unit * (self.depth + offset) + text + "\n")
        else:
            self._chunks.append("\n")
        return self

    def lines(self, *texts: str) -> "CodeBuilder":
        for text in texts:
            self.line(text)
        return self

    def block(self, text: str) -> "CodeBuilder":
        """Append a dedented multi-line block; every 4 leading spaces is one level."""
        for raw_line in textwrap.dedent(text).strip("\n").split("\n"):
            stripped = raw_line.lstrip(" ")
            self.line(stripped, offset=(len(raw_line) - len(stripped)) // 4)
        return self

    def blank(self) -> "CodeBuilder":
        self._chunks.append("\n")
        return self

    def raw(self, text: str) -> "CodeBuilder":
        """Append pre-rendered text verbatim (already indented)."""
        if text:
            self._chunks.append(text)
        return self

    @contextmanager
    def indented(self, levels: int = 1):
        """Temporarily increase the depth of appended lines."""
        self.depth += levels
        try:
            yield self
        finally:
            self.depth -= levels

    def build(self) -> str:
        return "".join(self._chunks)

    def __len__(self) -> int:
        return len(self._chunks)

    def __bool__(self) -> bool:
        return bool(self._chunks)

"""Indentation-aware writer for generated code fragments."""
from contextlib import contextmanager
from typing import Iterator, List


class CodeWriter:
    """
    Builds a fragment line by line.

    Every line of a multi-line write gets the current indentation, so an
    embedded block keeps its relative layout. Blank lines stay empty.
    """

    def __init__(self, indent_text: str = "  "):
        self.indent_text = indent_text
        self.level = 0
        self._lines: List[str] = [""]

    @property
    def at_line_start(self) -> bool:
        return self._lines[-1] == ""

    def write(self, text: str) -> "CodeWriter":
        first, *rest = text.split("\n")
        self._append(first)
        for piece in rest:
            self._lines.append("")
            self._append(piece)
        return self

    def new_line(self) -> "CodeWriter":
        self._lines.append("")
        return self

    def write_line(self, text: str) -> "CodeWriter":
        if not self.at_line_start:
            self.new_line()
        return self.write(text).new_line()

    @contextmanager
    def indent_block(self) -> Iterator["CodeWriter"]:
        """Write the block one level deeper, on lines of its own."""
        if not self.at_line_start:
            self.new_line()
        self.level += 1
        try:
            yield self
        finally:
            self.level -= 1
        if not self.at_line_start:
            self.new_line()

    def to_string(self) -> str:
        return "\n".join(self._lines)

    def __str__(self) -> str:
        return self.to_string()

    def _append(self, piece: str) -> None:
        if not piece:
            return
        if self.at_line_start:
            piece = self.indent_text * self.level + piece
        self._lines[-1] += piece

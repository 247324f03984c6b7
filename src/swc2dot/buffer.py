# src/swc2dot/buffer.py
from __future__ import annotations

# General imports (stdlib)
from dataclasses import dataclass
from typing import List

INDENT_SIZE = 4
LINE_WIDTH = 80


def get_indent(level: int) -> str:
    """Return the spaces for `level` indentation units."""
    return " " * (INDENT_SIZE * level)


@dataclass(frozen=True)
class Indent:
    """
    Indentation style of a StringBuffer.

    Attributes:
        first (int): Indent level of the first line.
        main (int): Indent level of every subsequent line.
    """
    first: int = 0
    main: int = 0

    @classmethod
    def flat(cls, level: int) -> "Indent":
        """Indent all lines to the same level."""
        return cls(first=level, main=level)

    @classmethod
    def absolute_first_line(cls, first_line_level: int, main_level: int) -> "Indent":
        return cls(first=first_line_level, main=main_level)

    @classmethod
    def relative_first_line(cls, offset: int, main_level: int) -> "Indent":
        """
        Offset the first line from the main level.

        `relative_first_line(-1, 3)` equals `absolute_first_line(2, 3)`.
        """
        return cls(first=main_level + offset, main=main_level)

    @classmethod
    def zero(cls) -> "Indent":
        return cls(first=0, main=0)


class StringBuffer:
    """
    Line-wrapping text buffer that reads as empty until it gets real content.

    Use:
        `push` appends text and marks the buffer visible. `weak_push` and
        `newline` append without marking it, so headers and configuration can
        be staged in a buffer that only shows up if something is pushed later.

        Text is wrapped at `line_width` columns: a piece that does not fit on
        the current line starts a new one, unless the cursor is already at
        the start of a line. A piece longer than the line is kept whole and
        the cursor moves to a fresh line after it.
    """

    def __init__(
        self,
        leading_newline: bool = False,
        indent: Indent = Indent(),
        line_width: int = LINE_WIDTH,
    ) -> None:
        self._parts: List[str] = []
        if leading_newline:
            self._parts.append("\n")
        self._parts.append(get_indent(indent.first))

        self.visible = False
        self.indent_level = indent.main
        self.line_width = line_width
        self.cursor_position = INDENT_SIZE * indent.first
        self._assert_cursor_is_within_line()

    def push(self, text: str) -> None:
        """Append `text` and mark the buffer as holding real content."""
        self.visible = True
        self.weak_push(text)

    def weak_push(self, text: str) -> None:
        """Append `text` without marking the buffer as modified."""
        self._assert_cursor_is_within_line()

        # Start on a new line if the text will not fit, unless already at the start of one
        if len(text) > self.remaining_space_on_line() and self.cursor_position > self.newline_cursor_position():
            self.newline()

        self._parts.append(text)

        if self.cursor_position + len(text) <= self.line_width:
            self.cursor_position += len(text)
        else:
            # Overlong text ran off the end of the line
            self.newline()

        self._assert_cursor_is_within_line()

    def newline(self) -> None:
        """Break the line and indent the next one. Does not mark the buffer as modified."""
        self._parts.append("\n")
        self._parts.append(get_indent(self.indent_level))
        self.cursor_position = self.newline_cursor_position()
        self._assert_cursor_is_within_line()

    def newline_cursor_position(self) -> int:
        return INDENT_SIZE * self.indent_level

    def remaining_space_on_line(self) -> int:
        return self.line_width - self.cursor_position

    def getvalue(self) -> str:
        """Return the buffer contents, or "" if nothing visible was ever pushed."""
        if not self.visible:
            return ""
        return "".join(self._parts)

    def __str__(self) -> str:
        return self.getvalue()

    def __len__(self) -> int:
        return len(self.getvalue())

    def _assert_cursor_is_within_line(self) -> None:
        if self.cursor_position > self.line_width:
            raise RuntimeError(
                f"Cursor position {self.cursor_position} greater than line width {self.line_width}."
            )

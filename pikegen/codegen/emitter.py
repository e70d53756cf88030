"""
Line and Table Emission.

An append-only line buffer with indentation, coalesced blank lines and
column-aligned tables, plus the blank-line policy for sequences of blocks.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterable, Iterator, List, Sequence, TypeVar

from .source import Sourcelike, serialize
from ..naming.names import Name
from ..utils.constants import BLOCK_OPEN, BlankLines, COMMENT_PREFIX, DEFAULT_INDENT_SIZE

T = TypeVar("T")


class SourceEmitter:
    """
    Append-only buffer of output lines.

    Blank lines are requested rather than written: consecutive requests
    collapse into one, and a request at the start of the output or right
    after a block opener is dropped.
    """

    def __init__(self, resolve: Callable[[Name], str], indent_size: int = DEFAULT_INDENT_SIZE):
        self._resolve = resolve
        self._indent_str = " " * indent_size
        self._lines: List[str] = []
        self._indent_level = 0
        self._pending_blank = False
        self._prevent_blank = True

    def reset(self) -> None:
        """Reset the emitter for a new rendering pass."""
        self._lines = []
        self._indent_level = 0
        self._pending_blank = False
        self._prevent_blank = True

    def serialize(self, source: Sourcelike) -> str:
        return serialize(source, self._resolve)

    def emit_line(self, *parts: Sourcelike) -> None:
        if self._pending_blank and not self._prevent_blank:
            self._lines.append("")
        self._pending_blank = False

        text = self.serialize(parts)
        self._lines.append(f"{self._indent_str * self._indent_level}{text}".rstrip())
        self._prevent_blank = text.endswith(BLOCK_OPEN.strip())

    def ensure_blank_line(self) -> None:
        self._pending_blank = True

    @contextmanager
    def indent(self) -> Iterator[None]:
        self._indent_level += 1
        try:
            yield
        finally:
            self._indent_level -= 1

    def emit_table(self, rows: Sequence[Sequence[Sourcelike]]) -> None:
        """
        Emit rows with every column but the last padded to its widest cell.

        Rows are emitted in the given order; only spacing changes.
        """
        if not rows:
            return

        cells = [[self.serialize(cell) for cell in row] for row in rows]
        column_count = max(len(row) for row in cells)
        widths = [
            max((len(row[i]) for row in cells if len(row) > i), default=0)
            for i in range(column_count)
        ]
        for row in cells:
            padded = [
                cell if i == len(row) - 1 else cell.ljust(widths[i])
                for i, cell in enumerate(row)
            ]
            self.emit_line("".join(padded))

    def emit_comment_lines(self, lines: Iterable[str], prefix: str = COMMENT_PREFIX) -> None:
        for line in lines:
            self.emit_line(prefix, line)

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    def text(self) -> str:
        if not self._lines:
            return ""
        return "\n".join(self._lines) + "\n"


def for_each_with_blank_lines(
    emitter: SourceEmitter,
    items: Iterable[T],
    blank_lines: BlankLines,
    f: Callable[[T], None],
) -> None:
    """
    Call `f` for every item, requesting blank lines per `blank_lines`.

    LEADING requests one before every item, INTERPOSING only between
    items, LEADING_AND_INTERPOSING both.
    """
    for i, item in enumerate(items):
        if blank_lines is BlankLines.LEADING:
            emitter.ensure_blank_line()
        elif blank_lines is BlankLines.INTERPOSING and i > 0:
            emitter.ensure_blank_line()
        elif blank_lines is BlankLines.LEADING_AND_INTERPOSING:
            emitter.ensure_blank_line()
        f(item)

"""In-memory buffer implementing the engine's ``EditableBuffer`` protocol."""

from __future__ import annotations

import re
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Iterable, Optional

from jade_mode.runtime import telemetry

from .document import BufferDocument
from .state import BufferState, Cursor
from .sync import BufferMirror
from .undo import UndoEntry, EditHistory
from .validation import ensure_cursor, ensure_row

_LEADING_WHITESPACE = re.compile(r"[ \t]*")


@dataclass(slots=True)
class BufferDelta:
    version: int
    text: str
    cursor: Cursor
    label: str


class Buffer:
    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        history: Optional[EditHistory] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self.history = history or EditHistory()
        self._transaction: Optional["Transaction"] = None

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "Buffer":
        return cls(name=name, document=BufferDocument.from_text(text))

    @classmethod
    def from_lines(cls, lines: Iterable[str], *, name: str = "default") -> "Buffer":
        return cls(name=name, document=BufferDocument(_lines=list(lines) or [""]))

    @property
    def text(self) -> str:
        return self.document.text

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self.document.snapshot())

    # -- EditableBuffer -------------------------------------------------

    def line_count(self) -> int:
        return self.document.line_count

    def line_text(self, index: int) -> str:
        return self.document.get_line(ensure_row(self.document, index))

    def cursor_position(self) -> Cursor:
        return self.state.cursor

    def set_cursor_position(self, row: int, col: int) -> None:
        ensure_cursor(self.document, (row, col))
        self.state.set_cursor(row, col)

    def insert_text(self, text: str, *, cursor: Optional[Cursor] = None) -> BufferDelta:
        position = cursor or self.state.cursor
        return self.replace_range(position, position, text, label="insert_text")

    def insert_line_break(self) -> BufferDelta:
        position = self.state.cursor
        return self.replace_range(position, position, "\n", label="insert_line_break")

    def indent_line_to(self, level: int) -> BufferDelta:
        """Replace the cursor line's leading blanks with ``level`` spaces."""

        if level < 0:
            raise ValueError("indentation level cannot be negative")
        row, _ = self.state.cursor
        line = self.line_text(row)
        current = _LEADING_WHITESPACE.match(line)
        end = current.end() if current else 0
        return self.replace_range(
            (row, 0), (row, end), " " * level, label="indent_line_to"
        )

    # -- editing ----------------------------------------------------------

    def transaction(self, label: str) -> "Transaction":
        """Group every edit made inside the ``with`` block into one undo step."""

        return Transaction(self, label)

    def replace_range(
        self, start: Cursor, end: Cursor, text: str, *, label: str
    ) -> BufferDelta:
        start = ensure_cursor(self.document, start)
        end = ensure_cursor(self.document, end)
        if end < start:
            start, end = end, start
        with Transaction(self, label):
            before_text = self.document.text
            start_offset = self.offset_of(start)
            end_offset = self.offset_of(end)
            new_text = before_text[:start_offset] + text + before_text[end_offset:]
            self.document = self.document.replace(lines=new_text.split("\n"))
            self.state.set_cursor(*self.cursor_at(start_offset + len(text)))
            self.state.last_change_tick = self.document.version

        return BufferDelta(
            version=self.document.version,
            text=self.document.text,
            cursor=self.state.cursor,
            label=label,
        )

    def undo(self) -> bool:
        entry = self.history.step_back()
        if entry is None:
            return False
        self._restore(entry.before_text, entry.cursor_before)
        return True

    def redo(self) -> bool:
        entry = self.history.step_forward()
        if entry is None:
            return False
        self._restore(entry.after_text, entry.cursor_after)
        return True

    # -- positions ----------------------------------------------------------

    def offset_of(self, cursor: Cursor) -> int:
        row, col = cursor
        return self.document.line_offset(row) + col

    def cursor_at(self, offset: int) -> Cursor:
        running = 0
        lines = self.document.snapshot()
        for row, line in enumerate(lines):
            if offset <= running + len(line):
                return (row, offset - running)
            running += len(line) + 1
        return (len(lines) - 1, len(lines[-1]))

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.document.text,
            cursor=self.state.cursor,
            attributes=dict(attributes or {}),
        )

    def _restore(self, text: str, cursor: Cursor) -> None:
        self.document = self.document.replace(lines=text.split("\n"))
        self.state.set_cursor(*cursor)
        self.state.last_change_tick = self.document.version


class Transaction(AbstractContextManager["Transaction"]):
    """Atomic edit scope.

    Only the outermost transaction on a buffer records undo history. If the
    block raises, the buffer text and cursor are put back as they were on
    entry, so callers never observe half of a grouped edit.
    """

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None
        self._outermost = False
        self._before_document: Optional[BufferDocument] = None
        self._before_cursor: Cursor = (0, 0)

    def __enter__(self) -> "Transaction":
        self._outermost = self.buffer._transaction is None
        if self._outermost:
            self.buffer._transaction = self
            self._before_document = self.buffer.document
            self._before_cursor = self.buffer.state.cursor
            self._span_cm = telemetry.span(
                name=f"buffer::{self.label}",
                logger_name="jade_mode.buffer",
                metadata={"buffer": self.buffer.name},
            )
            self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if not self._outermost:
            return False
        self.buffer._transaction = None
        before = self._before_document
        try:
            if before is None:
                return False
            if exc_type is not None:
                self.buffer.document = before
                self.buffer.state.set_cursor(*self._before_cursor)
            elif self.buffer.document.text != before.text:
                self.buffer.history.record(
                    UndoEntry(
                        label=self.label,
                        before_text=before.text,
                        after_text=self.buffer.document.text,
                        cursor_before=self._before_cursor,
                        cursor_after=self.buffer.state.cursor,
                    )
                )
        finally:
            if self._span_cm is not None:
                self._span_cm.__exit__(exc_type, exc, tb)
        return False

"""Boundary types between the engine, the buffer, and host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from .state import Cursor


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot of buffer text and cursor."""

    text: str
    cursor: Cursor
    attributes: dict[str, str] = field(default_factory=dict)


@runtime_checkable
class LineSource(Protocol):
    """Read-only view the indentation, navigation and outline code needs."""

    def line_count(self) -> int:
        ...

    def line_text(self, index: int) -> str:
        ...

    def cursor_position(self) -> Cursor:
        ...


@runtime_checkable
class EditableBuffer(LineSource, Protocol):
    """Everything the engine asks of a host buffer.

    Hosts that can group edits may also provide ``transaction(label)``
    returning a context manager; the engine uses it when present.
    """

    def set_cursor_position(self, row: int, col: int) -> None:
        ...

    def insert_text(self, text: str) -> object:
        """Insert ``text`` at the cursor and leave the cursor after it."""
        ...

    def insert_line_break(self) -> object:
        """Split the cursor line; the cursor moves to column 0 of the new line."""
        ...

    def indent_line_to(self, level: int) -> object:
        """Set the cursor line's indentation; the cursor lands after it."""
        ...


class BufferValidationError(RuntimeError):
    """Raised when a row or cursor falls outside the buffer."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor

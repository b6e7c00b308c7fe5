"""Newline handling with automatic indentation and brace-pair completion."""

from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass
from typing import ContextManager, Literal

from jade_mode.buffer.state import Cursor
from jade_mode.buffer.sync import EditableBuffer
from jade_mode.config import DEFAULT_INDENT_OFFSET

from .scanner import code_portion, indentation, opens_block

NewlineBranch = Literal["brace_pair", "plain"]


@dataclass(frozen=True, slots=True)
class NewlineResult:
    branch: NewlineBranch
    cursor: Cursor
    indent: int


def _edit_scope(buffer: EditableBuffer, label: str) -> ContextManager[object]:
    transaction = getattr(buffer, "transaction", None)
    if callable(transaction):
        return transaction(label)
    return nullcontext()


def handle_newline(
    buffer: EditableBuffer, *, indent_offset: int = DEFAULT_INDENT_OFFSET
) -> NewlineResult:
    """Break the cursor line and indent the new one.

    Right after an opening brace the edit also writes the closing brace on
    its own line, leaving the cursor on the indented, empty body line. A
    brace inside a ``//`` comment does not count. All insertions happen
    inside one buffer transaction.
    """

    row, col = buffer.cursor_position()
    line = buffer.line_text(row)
    current = indentation(line)
    before, after = line[:col], line[col:]

    if opens_block(code_portion(before)):
        with _edit_scope(buffer, "newline::brace_pair"):
            _split_brace_pair(buffer, row, current, after, indent_offset)
        return NewlineResult("brace_pair", buffer.cursor_position(), current + indent_offset)

    level = current + indent_offset if opens_block(line) else current
    with _edit_scope(buffer, "newline::plain"):
        buffer.insert_line_break()
        buffer.indent_line_to(level)
    return NewlineResult("plain", buffer.cursor_position(), level)


def _split_brace_pair(
    buffer: EditableBuffer, row: int, current: int, after: str, indent_offset: int
) -> None:
    body_level = current + indent_offset
    remainder = after.strip()

    buffer.insert_line_break()
    buffer.indent_line_to(body_level)

    # The tail that followed the cursor now sits after the body indentation;
    # it moves to the closer line, where an existing "}" serves as the closer.
    buffer.insert_line_break()
    buffer.indent_line_to(current)
    if not remainder.startswith("}"):
        buffer.insert_text("} " if remainder else "}")

    buffer.set_cursor_position(row + 1, body_level)


__all__ = ["NewlineResult", "NewlineBranch", "handle_newline"]

"""One-line lookback indentation.

The level for a line is derived from the nearest non-blank line above it
and nothing further back. Nesting works because each opening line is
itself already indented correctly when the next line is computed. A line
whose stored indentation was edited by hand is taken at face value.
"""

from __future__ import annotations

from typing import Optional

from jade_mode.buffer.sync import BufferValidationError, EditableBuffer, LineSource
from jade_mode.config import DEFAULT_INDENT_OFFSET

from .scanner import indentation, is_blank_line, is_closing_brace_line, opens_block


def previous_nonblank_line(buffer: LineSource, line_index: int) -> Optional[int]:
    """Row of the closest non-blank line above ``line_index``, if any."""

    for row in range(line_index - 1, -1, -1):
        if not is_blank_line(buffer.line_text(row)):
            return row
    return None


def compute_indent(
    buffer: LineSource, line_index: int, *, indent_offset: int = DEFAULT_INDENT_OFFSET
) -> int:
    if line_index < 0 or line_index >= buffer.line_count():
        raise BufferValidationError(f"Row {line_index} out of range")

    anchor = previous_nonblank_line(buffer, line_index)
    if anchor is None:
        return 0

    anchor_text = buffer.line_text(anchor)
    level = indentation(anchor_text)
    if opens_block(anchor_text):
        level += indent_offset

    if is_closing_brace_line(buffer.line_text(line_index)):
        level = max(0, level - indent_offset)
    return level


def indent_current_line(
    buffer: EditableBuffer, *, indent_offset: int = DEFAULT_INDENT_OFFSET
) -> int:
    """Re-indent the cursor line and return the level applied.

    A cursor inside the old indentation ends up after the new one; a cursor
    in the line's content keeps its place relative to that content.
    """

    row, col = buffer.cursor_position()
    text = buffer.line_text(row)
    old_indent = len(text) - len(text.lstrip(" \t"))
    level = compute_indent(buffer, row, indent_offset=indent_offset)

    buffer.indent_line_to(level)
    if col > old_indent:
        buffer.set_cursor_position(row, level + (col - old_indent))
    return level


__all__ = ["compute_indent", "indent_current_line", "previous_nonblank_line"]

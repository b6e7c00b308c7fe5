"""Motion between function definitions.

``beginning_of_defun`` only needs the defun line pattern. ``end_of_defun``
is the one place that does real brace matching: it walks forward one
character at a time keeping a depth count, skipping ``//`` comments, so
it can step over arbitrarily nested blocks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Literal, Optional

from jade_mode.buffer.state import Cursor
from jade_mode.buffer.sync import EditableBuffer, LineSource
from jade_mode.runtime import telemetry

from .scanner import code_portion, is_function_definition_line

NavigationStatus = Literal["moved", "no_defun", "unmatched"]


@dataclass(frozen=True, slots=True)
class NavigationResult:
    status: NavigationStatus
    cursor: Cursor
    repeats: int = 0

    @property
    def moved(self) -> bool:
        return self.repeats > 0


def find_defun_start_backward(buffer: LineSource, cursor: Cursor) -> Optional[Cursor]:
    """Start of the closest defun line beginning strictly before ``cursor``."""

    row, col = cursor
    first = row if col > 0 else row - 1
    for candidate in range(first, -1, -1):
        if is_function_definition_line(buffer.line_text(candidate)):
            return (candidate, 0)
    return None


def find_defun_start_forward(buffer: LineSource, cursor: Cursor) -> Optional[Cursor]:
    """Start of the closest defun line beginning strictly after ``cursor``."""

    row, _ = cursor
    for candidate in range(row + 1, buffer.line_count()):
        if is_function_definition_line(buffer.line_text(candidate)):
            return (candidate, 0)
    return None


def _code_chars(buffer: LineSource, start: Cursor) -> Iterator[tuple[Cursor, str]]:
    row, col = start
    for current in range(row, buffer.line_count()):
        code = code_portion(buffer.line_text(current))
        first = col if current == row else 0
        for index in range(first, len(code)):
            yield (current, index), code[index]


def find_block_open(buffer: LineSource, cursor: Cursor) -> Optional[Cursor]:
    """Position of the next ``{`` at or after ``cursor``, outside comments."""

    for position, char in _code_chars(buffer, cursor):
        if char == "{":
            return position
    return None


def find_matching_close(buffer: LineSource, opening: Cursor) -> Optional[Cursor]:
    """Position of the ``}`` balancing the ``{`` at ``opening``."""

    depth = 0
    for position, char in _code_chars(buffer, opening):
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return position
    return None


def beginning_of_defun(
    buffer: EditableBuffer, cursor: Optional[Cursor] = None, count: int = 1
) -> NavigationResult:
    """Move to the start of the ``count``-th preceding defun line.

    A negative ``count`` moves forward to following defun starts instead.
    When the search runs out the cursor stays at the last defun reached.
    """

    position = cursor if cursor is not None else buffer.cursor_position()
    search = find_defun_start_backward if count >= 0 else find_defun_start_forward
    repeats = 0
    status: NavigationStatus = "moved"
    for _ in range(abs(count)):
        target = search(buffer, position)
        if target is None:
            status = "no_defun"
            break
        position = target
        repeats += 1

    if repeats:
        buffer.set_cursor_position(*position)
    if status != "moved":
        telemetry.record_event(
            "navigate.defun_start_miss",
            data={"cursor": position, "count": count, "repeats": repeats},
            logger_name="jade_mode.engine",
        )
    return NavigationResult(status, buffer.cursor_position(), repeats)


def end_of_defun(
    buffer: EditableBuffer, cursor: Optional[Cursor] = None, count: int = 1
) -> NavigationResult:
    """Move onto the ``}`` that closes the next block, ``count`` times.

    Finding no further ``{`` ends the repetitions quietly. A ``{`` whose
    scan reaches the end of the buffer unbalanced reports ``unmatched`` and
    leaves the cursor where that repetition started. Repetitions that
    already succeeded stand, so with ``count > 1`` the cursor can end on an
    earlier ``}`` rather than back at its position before the call.
    """

    position = cursor if cursor is not None else buffer.cursor_position()
    repeats = 0
    status: NavigationStatus = "moved"
    for _ in range(max(count, 0)):
        opening = find_block_open(buffer, position)
        if opening is None:
            status = "no_defun"
            break
        closing = find_matching_close(buffer, opening)
        if closing is None:
            status = "unmatched"
            break
        position = closing
        repeats += 1

    if repeats:
        buffer.set_cursor_position(*position)
    if status != "moved":
        telemetry.record_event(
            f"navigate.defun_end_{status}",
            level="info" if status == "unmatched" else "debug",
            data={"cursor": position, "count": count, "repeats": repeats},
            logger_name="jade_mode.engine",
        )
    return NavigationResult(status, buffer.cursor_position(), repeats)


__all__ = [
    "NavigationResult",
    "NavigationStatus",
    "beginning_of_defun",
    "end_of_defun",
    "find_block_open",
    "find_defun_start_backward",
    "find_defun_start_forward",
    "find_matching_close",
]

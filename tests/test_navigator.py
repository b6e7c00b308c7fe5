from __future__ import annotations

from jade_mode.buffer import Buffer
from jade_mode.engine import beginning_of_defun, end_of_defun

SAMPLE = (
    "fn a() {",
    "    return 1;",
    "}",
    "",
    "fn b() {",
    "    if x {",
    "        // } not a real brace",
    "        return 2;",
    "    }",
    "}",
)


def make_buffer(*lines: str, cursor: tuple[int, int] = (0, 0)) -> Buffer:
    buffer = Buffer.from_lines(lines or SAMPLE)
    buffer.set_cursor_position(*cursor)
    return buffer


def test_beginning_of_defun_finds_enclosing_function() -> None:
    buffer = make_buffer(cursor=(7, 3))

    result = beginning_of_defun(buffer)

    assert result.status == "moved"
    assert result.cursor == (4, 0)
    assert buffer.cursor_position() == (4, 0)


def test_beginning_of_defun_from_line_start_goes_to_previous() -> None:
    buffer = make_buffer(cursor=(4, 0))

    beginning_of_defun(buffer)

    assert buffer.cursor_position() == (0, 0)


def test_beginning_of_defun_inside_defun_line() -> None:
    buffer = make_buffer(cursor=(4, 3))

    beginning_of_defun(buffer)

    assert buffer.cursor_position() == (4, 0)


def test_beginning_of_defun_repeats() -> None:
    buffer = make_buffer(cursor=(7, 3))

    result = beginning_of_defun(buffer, count=2)

    assert result.repeats == 2
    assert buffer.cursor_position() == (0, 0)


def test_beginning_of_defun_stops_at_last_match() -> None:
    buffer = make_buffer(cursor=(7, 3))

    result = beginning_of_defun(buffer, count=5)

    assert result.status == "no_defun"
    assert result.repeats == 2
    assert buffer.cursor_position() == (0, 0)


def test_beginning_of_defun_on_empty_buffer_is_noop() -> None:
    buffer = Buffer()

    result = beginning_of_defun(buffer)

    assert result.status == "no_defun"
    assert result.moved is False
    assert buffer.cursor_position() == (0, 0)


def test_beginning_of_defun_without_functions_keeps_cursor() -> None:
    buffer = make_buffer("let x = 1;", "let y = 2;", cursor=(1, 2))

    beginning_of_defun(buffer)

    assert buffer.cursor_position() == (1, 2)


def test_negative_count_moves_forward() -> None:
    buffer = make_buffer(cursor=(1, 0))

    result = beginning_of_defun(buffer, count=-1)

    assert result.status == "moved"
    assert buffer.cursor_position() == (4, 0)


def test_end_of_defun_lands_on_closing_brace() -> None:
    buffer = make_buffer(cursor=(0, 0))

    result = end_of_defun(buffer)

    assert result.status == "moved"
    assert buffer.cursor_position() == (2, 0)


def test_end_of_defun_skips_nested_blocks_and_comments() -> None:
    buffer = make_buffer(cursor=(4, 0))

    end_of_defun(buffer)

    assert buffer.cursor_position() == (9, 0)


def test_end_after_beginning_reaches_closing_line() -> None:
    buffer = make_buffer(cursor=(7, 3))

    beginning_of_defun(buffer)
    end_of_defun(buffer)

    row, col = buffer.cursor_position()
    assert row == 9
    assert buffer.line_text(row)[col] == "}"


def test_end_of_defun_repeats() -> None:
    buffer = make_buffer(cursor=(0, 0))

    result = end_of_defun(buffer, count=2)

    assert result.repeats == 2
    assert buffer.cursor_position() == (9, 0)


def test_end_of_defun_without_more_blocks_is_noop() -> None:
    buffer = make_buffer(cursor=(0, 0))

    result = end_of_defun(buffer, count=3)

    assert result.status == "no_defun"
    assert result.repeats == 2
    assert buffer.cursor_position() == (9, 0)


def test_end_of_defun_reports_unmatched_brace() -> None:
    buffer = make_buffer("fn a() {", "    if x {", "    }", cursor=(0, 0))

    result = end_of_defun(buffer)

    assert result.status == "unmatched"
    assert result.repeats == 0
    assert buffer.cursor_position() == (0, 0)


def test_end_of_defun_unmatched_after_earlier_repetition() -> None:
    buffer = make_buffer("fn a() {", "}", "fn b() {", cursor=(0, 0))

    result = end_of_defun(buffer, count=2)

    assert result.status == "unmatched"
    assert result.repeats == 1
    assert buffer.cursor_position() == (1, 0)


def test_end_of_defun_ignores_commented_opening_brace() -> None:
    buffer = make_buffer("// {", "fn a() {", "}", cursor=(0, 0))

    end_of_defun(buffer)

    assert buffer.cursor_position() == (2, 0)


def test_explicit_cursor_argument() -> None:
    buffer = make_buffer(cursor=(0, 0))

    result = end_of_defun(buffer, (4, 0))

    assert result.cursor == (9, 0)

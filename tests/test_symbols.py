from __future__ import annotations

from jade_mode.buffer import Buffer
from jade_mode.engine import FunctionDefinition, build_symbol_index
from jade_mode.engine.scanner import is_function_definition_line


def test_index_lists_functions_in_buffer_order() -> None:
    buffer = Buffer.from_lines(
        ["fn a() {", "    return 1;", "}", "fn b() {", "    return 2;", "}"]
    )

    index = build_symbol_index(buffer)

    assert [(entry.name, entry.offset) for entry in index] == [
        ("a", 0),
        ("b", buffer.offset_of((3, 0))),
    ]
    assert index[1] == FunctionDefinition(name="b", offset=25, line=3)


def test_index_keeps_duplicates_and_skips_unsupported_shapes() -> None:
    lines = [
        "fn twice() {",
        "}",
        "    fn indented() {",
        "fn with_args(x: i32) {",
        "fn twice () {",
        "// fn commented() {",
        "fn last()",
    ]
    buffer = Buffer.from_lines(lines)

    index = build_symbol_index(buffer)

    assert [entry.name for entry in index] == ["twice", "twice", "last"]
    assert [entry.line for entry in index] == [0, 4, 6]
    assert len(index) == sum(is_function_definition_line(line) for line in lines)


def test_index_is_idempotent() -> None:
    buffer = Buffer.from_text("fn a() {\n}\n\nfn b() {\n}\n")

    assert build_symbol_index(buffer) == build_symbol_index(buffer)


def test_index_tracks_buffer_changes() -> None:
    buffer = Buffer.from_lines(["fn a() {", "}"])
    assert [entry.name for entry in build_symbol_index(buffer)] == ["a"]

    buffer.set_cursor_position(1, 1)
    buffer.insert_text("\nfn b() {\n}")

    assert [entry.name for entry in build_symbol_index(buffer)] == ["a", "b"]


def test_empty_buffer_has_no_symbols() -> None:
    assert build_symbol_index(Buffer()) == ()

from __future__ import annotations

import pytest

from jade_mode.engine.scanner import (
    code_portion,
    function_name,
    indentation,
    is_blank_line,
    is_closing_brace_line,
    is_function_definition_line,
    opens_block,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("fn main()", "main"),
        ("fn main() {", "main"),
        ("fn   _helper_2 () {", "_helper_2"),
        ("fn add(x: i32) {", None),
        ("    fn nested() {", None),
        ("fnmain() {", None),
        ("fn 9lives() {", None),
        ("// fn commented() {", None),
        ("", None),
    ],
)
def test_function_name(text: str, expected: str | None) -> None:
    assert function_name(text) == expected
    assert is_function_definition_line(text) is (expected is not None)


def test_opens_block_allows_trailing_whitespace() -> None:
    assert opens_block("fn main() {")
    assert opens_block("    if x {   ")
    assert opens_block("{")
    assert not opens_block("fn main() {}")
    assert not opens_block("    return 1;")
    assert not opens_block("")


def test_blank_lines() -> None:
    assert is_blank_line("")
    assert is_blank_line("    ")
    assert is_blank_line("\t \t")
    assert not is_blank_line("  x")


def test_closing_brace_lines() -> None:
    assert is_closing_brace_line("}")
    assert is_closing_brace_line("    }")
    assert is_closing_brace_line("} // end")
    assert not is_closing_brace_line("return }")
    assert not is_closing_brace_line("")


def test_indentation_counts_leading_spaces_only() -> None:
    assert indentation("") == 0
    assert indentation("    return 1;") == 4
    assert indentation("        ") == 8
    assert indentation("\t    x") == 0


def test_code_portion_strips_comment() -> None:
    assert code_portion("    if x { // open {") == "    if x { "
    assert code_portion("// } only comment") == ""
    assert code_portion("return 1;") == "return 1;"

"""Editing verbs bound to keys in the Jade mode."""

from .editing import indent_line, newline_and_indent
from .navigation import (
    digit_argument,
    jump_to_defun_end,
    jump_to_defun_start,
    negative_argument,
    show_symbol_index,
)

__all__ = [
    "indent_line",
    "newline_and_indent",
    "digit_argument",
    "negative_argument",
    "jump_to_defun_start",
    "jump_to_defun_end",
    "show_symbol_index",
]

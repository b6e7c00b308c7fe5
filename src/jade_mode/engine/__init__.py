"""Structural analysis over Jade buffers: indentation, navigation, outline."""

from .indent import compute_indent, indent_current_line, previous_nonblank_line
from .navigator import NavigationResult, beginning_of_defun, end_of_defun
from .newline import NewlineResult, handle_newline
from .scanner import (
    code_portion,
    function_name,
    indentation,
    is_blank_line,
    is_closing_brace_line,
    is_function_definition_line,
    opens_block,
)
from .symbols import FunctionDefinition, build_symbol_index
from .tokens import TOKEN_RULES, TokenRule, TokenSpan, classify_line

__all__ = [
    "compute_indent",
    "indent_current_line",
    "previous_nonblank_line",
    "NavigationResult",
    "beginning_of_defun",
    "end_of_defun",
    "NewlineResult",
    "handle_newline",
    "code_portion",
    "function_name",
    "indentation",
    "is_blank_line",
    "is_closing_brace_line",
    "is_function_definition_line",
    "opens_block",
    "FunctionDefinition",
    "build_symbol_index",
    "TOKEN_RULES",
    "TokenRule",
    "TokenSpan",
    "classify_line",
]

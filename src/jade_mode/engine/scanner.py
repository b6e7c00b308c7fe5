"""Single-line structural predicates.

These regexes are the only source of structural truth for indentation,
navigation and the outline. Each answer depends on one line of text.
"""

from __future__ import annotations

import re
from typing import Optional

IDENTIFIER = r"[A-Za-z_]\w*"

DEFUN_PATTERN = re.compile(rf"^fn\s+({IDENTIFIER})\s*\(\)")
OPENS_BLOCK_PATTERN = re.compile(r"\{\s*$")
CLOSING_BRACE_PATTERN = re.compile(r"^\s*\}")
COMMENT_START = "//"


def function_name(text: str) -> Optional[str]:
    """Name defined by ``text`` if it is a ``fn name()`` line."""

    match = DEFUN_PATTERN.match(text)
    if match is None:
        return None
    return match.group(1)


def is_function_definition_line(text: str) -> bool:
    return DEFUN_PATTERN.match(text) is not None


def opens_block(text: str) -> bool:
    return OPENS_BLOCK_PATTERN.search(text) is not None


def is_blank_line(text: str) -> bool:
    return not text.strip()


def is_closing_brace_line(text: str) -> bool:
    return CLOSING_BRACE_PATTERN.match(text) is not None


def indentation(text: str) -> int:
    """Number of leading space characters."""

    return len(text) - len(text.lstrip(" "))


def code_portion(text: str) -> str:
    """``text`` with any trailing ``//`` comment removed."""

    index = text.find(COMMENT_START)
    if index < 0:
        return text
    return text[:index]


__all__ = [
    "IDENTIFIER",
    "DEFUN_PATTERN",
    "OPENS_BLOCK_PATTERN",
    "CLOSING_BRACE_PATTERN",
    "function_name",
    "is_function_definition_line",
    "opens_block",
    "is_blank_line",
    "is_closing_brace_line",
    "indentation",
    "code_portion",
]

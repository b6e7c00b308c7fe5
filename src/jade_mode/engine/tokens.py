"""Highlighting token rules.

``TOKEN_RULES`` is ordered: a highlighter must try rules top to bottom and
let the first rule that claims a character keep it. Comments come first,
then the defun name capture, so ``fn`` inside a comment is not a keyword
and a function name is never taken for a keyword or type.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal, Pattern

from .scanner import DEFUN_PATTERN

TokenCategory = Literal["comment", "function-name", "keyword", "type"]

KEYWORDS: tuple[str, ...] = ("fn", "return")
TYPES: tuple[str, ...] = ("i32",)


@dataclass(frozen=True, slots=True)
class TokenRule:
    pattern: Pattern[str]
    category: TokenCategory
    group: int = 0


@dataclass(frozen=True, slots=True)
class TokenSpan:
    start: int
    end: int
    category: TokenCategory


def _words(words: tuple[str, ...]) -> Pattern[str]:
    return re.compile(r"\b(?:%s)\b" % "|".join(re.escape(word) for word in words))


TOKEN_RULES: tuple[TokenRule, ...] = (
    TokenRule(re.compile(r"//.*$"), "comment"),
    TokenRule(DEFUN_PATTERN, "function-name", group=1),
    TokenRule(_words(KEYWORDS), "keyword"),
    TokenRule(_words(TYPES), "type"),
)


def classify_line(text: str) -> list[TokenSpan]:
    """Non-overlapping token spans for one line, sorted by start column."""

    claimed = [False] * len(text)
    spans: list[TokenSpan] = []
    for rule in TOKEN_RULES:
        for match in rule.pattern.finditer(text):
            start, end = match.span(rule.group)
            if start == end or any(claimed[start:end]):
                continue
            claimed[start:end] = [True] * (end - start)
            spans.append(TokenSpan(start, end, rule.category))
    spans.sort(key=lambda span: span.start)
    return spans


__all__ = ["TOKEN_RULES", "TokenRule", "TokenSpan", "classify_line", "KEYWORDS", "TYPES"]

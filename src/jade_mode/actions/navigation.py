"""Defun motion, numeric prefix arguments, and the outline index."""

from __future__ import annotations

from jade_mode.engine import NavigationResult
from jade_mode.keymaps import ResolutionMatch
from jade_mode.modes.context import ModeContext, ModeResult

from ._operations import bound_operation


def digit_argument(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    digit = str(match.action.metadata.get("digit", ""))
    text = (context.prefix or "") + digit
    context.prefix = text
    return ModeResult(consumed=True, status="prefix", message=text)


def negative_argument(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.prefix = "-"
    return ModeResult(consumed=True, status="prefix", message="-")


def _navigate(context: ModeContext, match: ResolutionMatch, *, edge: str) -> ModeResult:
    count = context.take_prefix_count()
    outcome = bound_operation(match)(context.buffer, count)
    status = outcome.status if isinstance(outcome, NavigationResult) else "moved"
    context.bus.emit(
        "jade.navigate",
        {
            "edge": edge,
            "count": count,
            "status": status,
            "cursor": context.buffer.cursor_position(),
        },
    )
    return ModeResult(consumed=True, status=f"defun_{edge}", message=status)


def jump_to_defun_start(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    return _navigate(context, match, edge="start")


def jump_to_defun_end(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    return _navigate(context, match, edge="end")


def show_symbol_index(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    context.prefix = None
    entries = tuple(bound_operation(match)(context.buffer))
    context.symbol_index = entries
    context.bus.emit("jade.outline", entries)
    return ModeResult(consumed=True, status="outline", message=f"{len(entries)} symbols")


__all__ = [
    "digit_argument",
    "negative_argument",
    "jump_to_defun_start",
    "jump_to_defun_end",
    "show_symbol_index",
]

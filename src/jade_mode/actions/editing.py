"""Actions that edit the buffer: newline and re-indent."""

from __future__ import annotations

from jade_mode.engine import NewlineResult
from jade_mode.keymaps import ResolutionMatch
from jade_mode.modes.context import ModeContext, ModeResult

from ._operations import bound_operation


def newline_and_indent(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    context.prefix = None
    outcome = bound_operation(match)(context.buffer)
    branch = outcome.branch if isinstance(outcome, NewlineResult) else None
    context.bus.emit(
        "jade.newline",
        {"branch": branch, "cursor": context.buffer.cursor_position()},
    )
    return ModeResult(consumed=True, status="newline", message=branch)


def indent_line(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    context.prefix = None
    level = bound_operation(match)(context.buffer)
    context.bus.emit(
        "jade.indent",
        {"level": level, "row": context.buffer.cursor_position()[0]},
    )
    return ModeResult(consumed=True, status="indent", message=str(level))


__all__ = ["newline_and_indent", "indent_line"]

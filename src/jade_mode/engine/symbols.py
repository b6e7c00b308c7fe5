"""Outline index of function definitions."""

from __future__ import annotations

from dataclasses import dataclass

from jade_mode.buffer.sync import LineSource

from .scanner import function_name


@dataclass(frozen=True, slots=True)
class FunctionDefinition:
    name: str
    offset: int  # character offset of the defining line in the buffer text
    line: int


def build_symbol_index(buffer: LineSource) -> tuple[FunctionDefinition, ...]:
    """Every ``fn name()`` line, top to bottom, duplicates included."""

    entries: list[FunctionDefinition] = []
    offset = 0
    for row in range(buffer.line_count()):
        text = buffer.line_text(row)
        name = function_name(text)
        if name is not None:
            entries.append(FunctionDefinition(name=name, offset=offset, line=row))
        offset += len(text) + 1
    return tuple(entries)


__all__ = ["FunctionDefinition", "build_symbol_index"]

"""Explicit registration of the Jade mode into a keymap registry.

A host hands ``register_jade_mode`` a ``ModeCapabilities`` struct holding
the operations it wants exposed; each becomes an ``ActionRef`` and gets
its default key bindings. Nothing is stored globally: two registries can
carry differently configured copies of the mode side by side.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Callable, Iterable, Optional, Sequence

from jade_mode.actions import editing, navigation
from jade_mode.buffer import Buffer
from jade_mode.buffer.sync import EditableBuffer, LineSource
from jade_mode.config import JadeModeSettings, load_settings
from jade_mode.engine import (
    FunctionDefinition,
    beginning_of_defun,
    build_symbol_index,
    end_of_defun,
    handle_newline,
    indent_current_line,
)
from jade_mode.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeymapRegistry,
    KeymapResolver,
    WhenClause,
)
from jade_mode.modes import JADE_MODE_NAME, JadeMode, ModeBus, ModeContext


@dataclass(frozen=True, slots=True)
class ModeCapabilities:
    """Operations the mode exposes to the host editor."""

    indent_current_line: Callable[[EditableBuffer], int]
    handle_newline: Callable[[EditableBuffer], object]
    jump_to_defun_start: Callable[[EditableBuffer, int], object]
    jump_to_defun_end: Callable[[EditableBuffer, int], object]
    build_symbol_index: Callable[[LineSource], Sequence[FunctionDefinition]]


def default_capabilities(settings: Optional[JadeModeSettings] = None) -> ModeCapabilities:
    offset = (settings or JadeModeSettings()).indent_offset
    return ModeCapabilities(
        indent_current_line=partial(indent_current_line, indent_offset=offset),
        handle_newline=partial(handle_newline, indent_offset=offset),
        jump_to_defun_start=lambda buffer, count=1: beginning_of_defun(
            buffer, count=count
        ),
        jump_to_defun_end=lambda buffer, count=1: end_of_defun(buffer, count=count),
        build_symbol_index=build_symbol_index,
    )


def _actions(capabilities: ModeCapabilities) -> list[ActionRef]:
    actions = [
        ActionRef(
            id="jade.newline",
            handler=editing.newline_and_indent,
            description="Insert a newline and indent, closing an opened block",
            metadata={"operation": capabilities.handle_newline},
        ),
        ActionRef(
            id="jade.indent_line",
            handler=editing.indent_line,
            description="Re-indent the current line",
            metadata={"operation": capabilities.indent_current_line},
        ),
        ActionRef(
            id="jade.beginning_of_defun",
            handler=navigation.jump_to_defun_start,
            description="Move to the start of the previous function",
            metadata={"operation": capabilities.jump_to_defun_start},
        ),
        ActionRef(
            id="jade.end_of_defun",
            handler=navigation.jump_to_defun_end,
            description="Move to the closing brace of the next function",
            metadata={"operation": capabilities.jump_to_defun_end},
        ),
        ActionRef(
            id="jade.symbol_index",
            handler=navigation.show_symbol_index,
            description="List the functions defined in the buffer",
            metadata={"operation": capabilities.build_symbol_index},
        ),
        ActionRef(
            id="jade.negative_argument",
            handler=navigation.negative_argument,
            description="Start a negative repeat count",
        ),
    ]
    actions.extend(
        ActionRef(
            id=f"jade.digit_argument.{digit}",
            handler=navigation.digit_argument,
            description=f"Append {digit} to the repeat count",
            metadata={"digit": digit},
        )
        for digit in "0123456789"
    )
    return actions


def _binding(
    binding_id: str, action_id: str, keys: str, when: tuple[str, ...] = ()
) -> Binding:
    return Binding(
        id=f"{JADE_MODE_NAME}.{binding_id}",
        mode=JADE_MODE_NAME,
        sequence=KeySequence.parse(keys),
        action_id=action_id,
        when=tuple(WhenClause.parse(clause) for clause in when),
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _binding("newline_enter", "jade.newline", "ENTER", when=("!read_only",)),
    _binding("newline_return", "jade.newline", "RETURN", when=("!read_only",)),
    _binding("indent_tab", "jade.indent_line", "TAB", when=("!read_only",)),
    _binding("beginning_of_defun", "jade.beginning_of_defun", "ctrl+alt+a"),
    _binding("end_of_defun", "jade.end_of_defun", "ctrl+alt+e"),
    _binding("symbol_index", "jade.symbol_index", "ctrl+alt+i"),
    _binding("symbol_index_chord", "jade.symbol_index", "ctrl+c ctrl+o"),
    _binding("negative_argument", "jade.negative_argument", "alt+-"),
) + tuple(
    _binding(f"digit_argument_{digit}", f"jade.digit_argument.{digit}", f"alt+{digit}")
    for digit in "0123456789"
)


def register_jade_mode(
    registry: KeymapRegistry,
    capabilities: Optional[ModeCapabilities] = None,
    *,
    settings: Optional[JadeModeSettings] = None,
    replace: bool = False,
    extra_bindings: Iterable[Binding] = (),
) -> ModeCapabilities:
    """Register the mode's actions and bindings; returns the capabilities used."""

    caps = capabilities or default_capabilities(settings)
    for action in _actions(caps):
        registry.register_action(action, replace=replace)
    for binding in DEFAULT_BINDINGS:
        registry.register_binding(binding, replace=replace)
    for binding in extra_bindings:
        registry.register_binding(binding, replace=replace)
    return caps


def create_jade_mode(
    buffer: Optional[Buffer] = None,
    *,
    settings: Optional[JadeModeSettings] = None,
    capabilities: Optional[ModeCapabilities] = None,
    bus: Optional[ModeBus] = None,
) -> JadeMode:
    """Build a ready-to-use ``JadeMode`` with its own registry and resolver."""

    resolved = settings or load_settings()
    registry = KeymapRegistry()
    register_jade_mode(registry, capabilities, settings=resolved)
    context = ModeContext(
        buffer=buffer or Buffer(),
        registry=registry,
        resolver=KeymapResolver(registry),
        bus=bus or ModeBus(),
        settings=resolved,
    )
    return JadeMode(context)


__all__ = [
    "ModeCapabilities",
    "DEFAULT_BINDINGS",
    "default_capabilities",
    "register_jade_mode",
    "create_jade_mode",
]

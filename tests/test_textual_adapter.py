from __future__ import annotations

from typing import Any, List, Sequence

from jade_mode.adapters.textual import (
    TextualJadeAdapter,
    TextualUIHooks,
    normalize_textual_key,
)
from jade_mode.buffer import Buffer
from jade_mode.config import JadeModeSettings
from jade_mode.engine import FunctionDefinition
from jade_mode.registration import create_jade_mode


def make_adapter(
    *lines: str, cursor: tuple[int, int] = (0, 0), **hook_overrides: Any
) -> TextualJadeAdapter:
    buffer = Buffer.from_lines(lines) if lines else Buffer(name="scratch.jade")
    buffer.set_cursor_position(*cursor)
    mode = create_jade_mode(buffer, settings=JadeModeSettings())
    hooks = TextualUIHooks(
        update_buffer=hook_overrides.pop("update_buffer", lambda mirror: None),
        **hook_overrides,
    )
    return TextualJadeAdapter(mode, hooks)


def test_adapter_updates_buffer_and_status() -> None:
    updates: List[str] = []
    statuses: List[str] = []
    adapter = make_adapter(
        "fn main() {",
        cursor=(0, 11),
        update_buffer=lambda mirror: updates.append(mirror.text),
        update_status=statuses.append,
    )

    result = adapter.handle_textual_key("ENTER")

    assert result.consumed is True
    assert updates[0] == "fn main() {"
    assert updates[-1] == "fn main() {\n    \n}"
    assert statuses == ["brace_pair"]


def test_adapter_mirror_carries_mode_name() -> None:
    mirrors: List[Any] = []
    adapter = make_adapter(update_buffer=mirrors.append)

    adapter.handle_textual_key("x", text="x")

    assert mirrors[-1].attributes == {"mode": "jade"}
    assert mirrors[-1].cursor == (0, 1)


def test_adapter_relays_outline_and_events() -> None:
    outlines: List[Sequence[FunctionDefinition]] = []
    events: List[tuple[str, object | None]] = []
    adapter = make_adapter(
        "fn a() {",
        "}",
        show_outline=outlines.append,
        handle_event=lambda name, payload: events.append((name, payload)),
    )

    adapter.handle_textual_key("i", modifiers=("CTRL", "Alt"))

    assert outlines == [(FunctionDefinition("a", 0, 0),)]
    assert [name for name, _ in events] == ["jade.outline"]


def test_adapter_logs_key_and_result_lines() -> None:
    lines: List[str] = []
    adapter = make_adapter(log=lines.append)

    adapter.handle_textual_key("q", text="q")

    assert lines[0].startswith("key ->")
    assert "key='q'" in lines[0]
    assert any(line.startswith("event ->") for line in lines)
    assert lines[-1].startswith("result <-")
    assert "status='insert'" in lines[-1]


def test_adapter_expires_pending_sequence() -> None:
    statuses: List[str] = []
    adapter = make_adapter("fn a() {", "}", update_status=statuses.append)

    pending = adapter.handle_textual_key("c", modifiers=("ctrl",))
    assert pending.status == "pending"
    assert adapter.process_timeouts(now=0.0) is None

    expired = adapter.process_timeouts(now=float("inf"))

    assert expired is not None
    assert expired.status == "timeout"
    assert adapter.mode.pending == ()
    assert statuses[-1] == "pending_timeout"
    assert adapter.process_timeouts(now=float("inf")) is None


def test_adapter_without_pending_sequence_has_no_timeout() -> None:
    adapter = make_adapter()

    adapter.handle_textual_key("x", text="x")

    assert adapter.process_timeouts(now=float("inf")) is None


def test_textual_key_names_map_to_binding_notation() -> None:
    assert normalize_textual_key("alt+minus") == ("-", None, ("alt",))
    assert normalize_textual_key("ctrl+plus") == ("+", None, ("ctrl",))
    assert normalize_textual_key("enter") == ("ENTER", None, ())
    assert normalize_textual_key("a", "a", printable=True) == ("a", "a", ())
    assert normalize_textual_key("minus", "-", printable=True) == ("-", "-", ())


def test_alt_minus_from_textual_starts_negative_prefix() -> None:
    adapter = make_adapter("fn a() {", "}", "", "fn b() {", "}", cursor=(1, 0))

    key, text, modifiers = normalize_textual_key("alt+minus")
    prefix = adapter.handle_textual_key(key, text=text, modifiers=modifiers)
    adapter.handle_textual_key("a", modifiers=("ctrl", "alt"))

    assert prefix.status == "prefix"
    assert adapter.mode.context.buffer.cursor_position() == (3, 0)

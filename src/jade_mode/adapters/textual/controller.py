"""Bridges a JadeMode and its bus events to Textual-style UI callbacks."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence, Tuple

from jade_mode.buffer import BufferMirror
from jade_mode.engine import FunctionDefinition
from jade_mode.modes import JadeMode, KeyInput, ModeResult
from jade_mode.runtime import telemetry

JADE_EVENTS = (
    "jade.insert",
    "jade.newline",
    "jade.indent",
    "jade.navigate",
    "jade.outline",
)


# Textual key names -> the key notation the Jade bindings are written in.
_NAMED_KEYS = {"enter": "ENTER", "return": "RETURN", "tab": "TAB", "escape": "ESC"}
_SYMBOL_KEYS = {"minus": "-", "plus": "+", "underscore": "_", "equals_sign": "="}


def normalize_textual_key(
    key: str, character: Optional[str] = None, *, printable: bool = False
) -> Tuple[str, Optional[str], Tuple[str, ...]]:
    """Split a Textual key such as ``"alt+minus"`` into ``(key, text, modifiers)``."""

    *modifiers, name = key.split("+") if key != "+" else ["+"]
    if name in _NAMED_KEYS:
        return (_NAMED_KEYS[name], None, tuple(modifiers))
    if character and printable and not modifiers:
        return (character, character, ())
    return (_SYMBOL_KEYS.get(name, name), None, tuple(modifiers))


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    show_outline: Callable[[Sequence[FunctionDefinition]], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualJadeAdapter:
    """Feeds host key events to the mode and pushes the results back out."""

    def __init__(self, mode: JadeMode, hooks: TextualUIHooks) -> None:
        self.mode = mode
        self.hooks = hooks
        self.logger = telemetry.get_logger("jade_mode.adapters.textual")
        self._deadline: Optional[float] = None
        for event in JADE_EVENTS:
            mode.context.bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )
        self._refresh_buffer()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        normalized = tuple(str(mod).lower() for mod in modifiers)
        self._log("key ->", key=key, text=text, mods=normalized)
        result = self.mode.handle_key(KeyInput(key=key, text=text, modifiers=normalized))
        self._arm_timeout(result)
        self._after_result(result)
        self._log(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
        )
        return result

    def process_timeouts(self, *, now: Optional[float] = None) -> Optional[ModeResult]:
        """Expire a pending key sequence once its deadline has passed."""

        if self._deadline is None:
            return None
        current = time.monotonic() if now is None else now
        if current < self._deadline:
            return None
        self._deadline = None
        result = self.mode.handle_timeout()
        self._after_result(result)
        self._log("timeout ->", status=result.status)
        return result

    def _arm_timeout(self, result: ModeResult) -> None:
        if result.timeout_ms:
            self._deadline = time.monotonic() + result.timeout_ms / 1000.0
        else:
            self._deadline = None

    def _after_result(self, result: ModeResult) -> None:
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        self._refresh_buffer()

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name == "jade.outline" and isinstance(payload, tuple):
            self.hooks.show_outline(payload)

    def _refresh_buffer(self) -> None:
        buffer = self.mode.context.buffer
        self.hooks.update_buffer(buffer.mirror(attributes={"mode": self.mode.name}))

    def _log(self, prefix: str, **fields: object) -> None:
        buffer = self.mode.context.buffer
        snapshot: dict[str, object] = {
            "cursor": buffer.cursor_position(),
            "pending": self.mode.pending,
            "buffer": buffer.name,
            "buffer_version": buffer.document.version,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        line = " ".join([prefix, *(f"{key}={value!r}" for key, value in snapshot.items())])
        self.logger.debug(line)
        self.hooks.log(line)


__all__ = [
    "TextualJadeAdapter",
    "TextualUIHooks",
    "JADE_EVENTS",
    "normalize_textual_key",
]

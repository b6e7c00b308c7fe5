"""Major mode for Jade buffers."""

from __future__ import annotations

from typing import List

from jade_mode.keymaps import ResolutionMatch
from jade_mode.runtime import telemetry

from .context import KeyInput, ModeContext, ModeResult

JADE_MODE_NAME = "jade"
_SELF_INSERT_MODIFIERS = {"shift"}


class JadeMode:
    """Dispatches keys through the keymap and self-inserts plain text."""

    name = JADE_MODE_NAME

    def __init__(
        self,
        context: ModeContext,
        *,
        default_pending_timeout_ms: int = 1000,
    ) -> None:
        self.context = context
        self.logger = telemetry.get_logger("jade_mode.modes")
        self._pending: List[str] = []
        self._default_timeout_ms = default_pending_timeout_ms

    @property
    def pending(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def handle_key(self, key: KeyInput) -> ModeResult:
        with telemetry.span(
            f"mode::{self.name}",
            logger_name="jade_mode.modes",
            metadata={"key": key.key},
        ):
            return self._dispatch(key)

    def handle_timeout(self) -> ModeResult:
        """Called by the host when a pending key sequence expires."""

        if not self._pending:
            return ModeResult(consumed=False, status="timeout")
        tokens = tuple(self._pending)
        self._pending.clear()
        result = self.context.resolver.resolve(
            self.name, tokens, context=self.context.flags
        )
        if result.status == "match" and result.match:
            return self._execute_match(result.match)
        return ModeResult(consumed=False, status="timeout", message="pending_timeout")

    def _dispatch(self, key: KeyInput) -> ModeResult:
        self._pending.append(key.token)
        result = self.context.resolver.resolve(
            self.name, tuple(self._pending), context=self.context.flags
        )

        if result.status == "match" and result.match:
            self._pending.clear()
            return self._execute_match(result.match)

        if result.status == "pending":
            return ModeResult(
                consumed=True,
                status="pending",
                message="awaiting_sequence",
                timeout_ms=result.timeout_ms or self._default_timeout_ms,
            )

        first_key = len(self._pending) == 1
        self._pending.clear()
        if first_key and self._is_self_insert(key):
            return self._self_insert(key.text or "")
        return ModeResult(consumed=False, status="unbound")

    def _execute_match(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            logger_name="jade_mode.modes",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)
        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)

    def _is_self_insert(self, key: KeyInput) -> bool:
        if not key.text or not key.text.isprintable():
            return False
        return all(mod.lower() in _SELF_INSERT_MODIFIERS for mod in key.modifiers)

    def _self_insert(self, text: str) -> ModeResult:
        if self.context.flags.get("read_only"):
            return ModeResult(consumed=True, status="read_only")
        self.context.prefix = None
        self.context.buffer.insert_text(text)
        self.context.bus.emit(
            "jade.insert", {"text": text, "cursor": self.context.buffer.cursor_position()}
        )
        return ModeResult(consumed=True, status="insert")


__all__ = ["JadeMode", "JADE_MODE_NAME"]

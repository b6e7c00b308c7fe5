"""State shared by the Jade mode, its actions and the host editor."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, DefaultDict, Dict, List, Optional, Tuple

from jade_mode.buffer import Buffer
from jade_mode.config import JadeModeSettings
from jade_mode.engine import FunctionDefinition
from jade_mode.keymaps import KeymapRegistry, KeymapResolver, KeyStroke


@dataclass(frozen=True, slots=True)
class KeyInput:
    """One key event as the host reports it."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @property
    def token(self) -> str:
        return KeyStroke(self.key, self.modifiers).token


@dataclass(frozen=True, slots=True)
class ModeResult:
    consumed: bool
    status: str = "ok"
    message: Optional[str] = None
    timeout_ms: Optional[int] = None


class ModeBus:
    """Synchronous event fan-out from actions to host callbacks."""

    def __init__(self) -> None:
        self._subscribers: DefaultDict[str, List[Callable[[object], None]]] = (
            defaultdict(list)
        )

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers[event].append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in tuple(self._subscribers.get(event, ())):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    """Everything an action may read or change while handling a key.

    ``prefix`` holds the numeric argument typed so far as text (``"-"``
    alone means minus one) until a command consumes it.
    """

    buffer: Buffer
    registry: KeymapRegistry
    resolver: KeymapResolver
    bus: ModeBus = field(default_factory=ModeBus)
    settings: JadeModeSettings = field(default_factory=JadeModeSettings)
    flags: Dict[str, bool] = field(default_factory=dict)
    prefix: Optional[str] = None
    symbol_index: Tuple[FunctionDefinition, ...] = ()

    def set_flag(self, name: str, value: bool) -> None:
        self.flags[name] = value

    def take_prefix_count(self) -> int:
        """Consume the pending numeric argument; 1 when none was typed."""

        raw, self.prefix = self.prefix, None
        if raw is None:
            return 1
        if raw == "-":
            return -1
        return int(raw)


__all__ = ["KeyInput", "ModeResult", "ModeBus", "ModeContext"]

"""Key notation and the binding records the registry stores.

Keys are written the way the default Jade bindings are: a stroke is
``mod+mod+key`` (``"ctrl+alt+a"``, ``"alt+-"``, ``"ctrl++"``) and a
sequence is strokes separated by spaces (``"ctrl+c ctrl+o"``). Named keys
such as ``ENTER`` and ``TAB`` keep their case; modifiers are lower-cased
and sorted so every spelling of a chord yields the same token.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Mapping

DEFAULT_SEQUENCE_TIMEOUT_MS = 1000


def _modifier_set(modifiers: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(sorted({m.strip().lower() for m in modifiers if m.strip()}))


@dataclass(frozen=True, slots=True)
class KeyStroke:
    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", _modifier_set(tuple(self.modifiers)))

    @classmethod
    def parse(cls, notation: str) -> "KeyStroke":
        text = notation.strip()
        # A trailing "+" is the plus key itself, not a separator.
        if text.endswith("+"):
            head, key = text[:-1].rstrip("+"), "+"
            return cls(key, tuple(head.split("+")) if head else ())
        *modifiers, key = text.split("+")
        return cls(key, tuple(modifiers))

    @property
    def token(self) -> str:
        return "+".join((*self.modifiers, self.key))


@dataclass(frozen=True, slots=True)
class KeySequence:
    strokes: tuple[KeyStroke, ...]
    timeout_ms: int = DEFAULT_SEQUENCE_TIMEOUT_MS

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("a key sequence needs at least one stroke")

    @classmethod
    def parse(
        cls, notation: str, *, timeout_ms: int = DEFAULT_SEQUENCE_TIMEOUT_MS
    ) -> "KeySequence":
        """``"ctrl+c ctrl+o"`` -> two strokes."""

        return cls.from_strings(*notation.split(), timeout_ms=timeout_ms)

    @classmethod
    def from_strings(
        cls, *keys: str, timeout_ms: int = DEFAULT_SEQUENCE_TIMEOUT_MS
    ) -> "KeySequence":
        return cls(tuple(KeyStroke.parse(key) for key in keys if key), timeout_ms)

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)


@dataclass(frozen=True, slots=True)
class WhenClause:
    """Buffer flag a binding depends on; ``"!read_only"`` negates."""

    flag: str
    expected: bool = True

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        text = expression.strip()
        negated = text.startswith("!")
        flag = text[1:] if negated else text
        if not flag:
            raise ValueError(f"empty flag in when clause {expression!r}")
        return cls(flag, not negated)

    def evaluate(self, flags: Mapping[str, bool]) -> bool:
        return bool(flags.get(self.flag, False)) == self.expected


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Handler plus the data it was registered with.

    Jade actions find the engine operation they wrap under
    ``metadata["operation"]``.
    """

    id: str
    handler: Callable[..., object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not callable(self.handler):
            raise TypeError(f"handler for action {self.id!r} is not callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    id: str
    mode: str
    sequence: KeySequence
    action_id: str
    description: str = ""
    when: tuple[WhenClause, ...] = ()
    priority: int = 0

    def __post_init__(self) -> None:
        if not (self.id and self.mode and self.action_id):
            raise ValueError("binding needs an id, a mode and an action id")
        clauses = tuple(
            c if isinstance(c, WhenClause) else WhenClause.parse(str(c))
            for c in self.when
        )
        object.__setattr__(self, "when", clauses)

    @property
    def when_map(self) -> Mapping[str, bool]:
        return {clause.flag: clause.expected for clause in self.when}

    @property
    def key_signature(self) -> str:
        return " ".join(self.sequence.tokens)

    def allows(self, flags: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(flags) for clause in self.when)


__all__ = [
    "DEFAULT_SEQUENCE_TIMEOUT_MS",
    "KeyStroke",
    "KeySequence",
    "WhenClause",
    "ActionRef",
    "Binding",
]

"""Trie-based resolution of key token sequences to bound actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Mapping, Optional, Sequence

from jade_mode.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(slots=True)
class TrieNode:
    bindings: list[str] = field(default_factory=list)
    children: Dict[str, "TrieNode"] = field(default_factory=dict)

    def child(self, token: str) -> "TrieNode":
        return self.children.setdefault(token, TrieNode())

    def next_tokens(self) -> tuple[str, ...]:
        return tuple(sorted(self.children))

    def descendant_bindings(self) -> list[str]:
        found: list[str] = []
        stack = list(self.children.values())
        while stack:
            node = stack.pop()
            found.extend(node.bindings)
            stack.extend(node.children.values())
        return found


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    consumed: int = 0
    next_expected: tuple[str, ...] = ()
    timeout_ms: Optional[int] = None


class KeymapResolver:
    """Resolves token sequences per mode; tries are rebuilt on registry changes."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = "jade_mode.keymaps"
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._cache: Dict[str, tuple[int, TrieNode]] = {}

    def resolve(
        self,
        mode: str,
        tokens: Sequence[str],
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        flags = context or {}
        sequence = tuple(tokens)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            metadata={"mode": mode, "length": len(sequence)},
        ) as handle:
            node: Optional[TrieNode] = self._trie(mode)
            consumed = 0
            for token in sequence:
                node = node.children.get(token) if node else None
                if node is None:
                    break
                consumed += 1

            if node is None:
                handle.add_metadata("status", "miss")
                return ResolutionResult(status="miss", consumed=consumed)

            match = self._select_match(node, flags)
            if match is not None:
                handle.add_metadata("status", "match")
                handle.add_metadata("binding_id", match.binding.id)
                return ResolutionResult(status="match", match=match, consumed=consumed)

            pending = [
                self._registry.get_binding(binding_id)
                for binding_id in node.descendant_bindings()
            ]
            pending = [binding for binding in pending if binding.allows(flags)]
            if not pending:
                handle.add_metadata("status", "miss")
                return ResolutionResult(status="miss", consumed=consumed)

            timeout_ms = min(binding.sequence.timeout_ms for binding in pending)
            handle.add_metadata("status", "pending")
            return ResolutionResult(
                status="pending",
                consumed=consumed,
                next_expected=node.next_tokens(),
                timeout_ms=timeout_ms,
            )

    def _trie(self, mode: str) -> TrieNode:
        revision = self._registry.revision()
        cached = self._cache.get(mode)
        if cached and cached[0] == revision:
            return cached[1]

        root = TrieNode()
        for binding in self._registry.iter_bindings(mode):
            node = root
            for token in binding.sequence.tokens:
                node = node.child(token)
            node.bindings.append(binding.id)
        self._cache[mode] = (revision, root)
        return root

    def _select_match(
        self, node: TrieNode, flags: Mapping[str, bool]
    ) -> Optional[ResolutionMatch]:
        candidates = [
            self._registry.get_binding(binding_id) for binding_id in node.bindings
        ]
        allowed = [binding for binding in candidates if binding.allows(flags)]
        if not allowed:
            return None
        allowed.sort(key=lambda binding: (-binding.priority, binding.id))
        chosen = allowed[0]
        return ResolutionMatch(
            binding=chosen, action=self._registry.get_action(chosen.action_id)
        )


__all__ = ["KeymapResolver", "ResolutionResult", "ResolutionMatch"]

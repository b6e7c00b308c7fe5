from __future__ import annotations

from jade_mode.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeymapRegistry,
    KeymapResolver,
    WhenClause,
)


def make_action(action_id: str) -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    binding_id: str,
    *,
    keys: tuple[str, ...] = ("ctrl+c", "ctrl+o"),
    action_id: str = "jade.test",
    when: tuple[WhenClause, ...] = (),
    priority: int = 0,
    timeout_ms: int = 1000,
) -> Binding:
    return Binding(
        id=binding_id,
        mode="jade",
        sequence=KeySequence.from_strings(*keys, timeout_ms=timeout_ms),
        action_id=action_id,
        when=when,
        priority=priority,
    )


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    for action_id in {binding.action_id for binding in bindings}:
        registry.register_action(make_action(action_id))
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_resolver_matches_exact_sequence() -> None:
    binding = make_binding("jade.outline")
    resolver = KeymapResolver(build_registry([binding]))

    result = resolver.resolve("jade", ("ctrl+c", "ctrl+o"))

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == binding.id
    assert result.consumed == 2


def test_resolver_reports_pending_for_prefix() -> None:
    resolver = KeymapResolver(build_registry([make_binding("jade.outline")]))

    result = resolver.resolve("jade", ("ctrl+c",))

    assert result.status == "pending"
    assert result.next_expected == ("ctrl+o",)


def test_resolver_misses_unknown_keys_and_modes() -> None:
    resolver = KeymapResolver(build_registry([make_binding("jade.outline")]))

    assert resolver.resolve("jade", ("x",)).status == "miss"
    assert resolver.resolve("other", ("ctrl+c",)).status == "miss"


def test_resolver_honors_when_clauses() -> None:
    gated = make_binding(
        "jade.newline",
        keys=("ENTER",),
        when=(WhenClause.parse("!read_only"),),
        action_id="jade.newline",
    )
    resolver = KeymapResolver(build_registry([gated]))

    assert resolver.resolve("jade", ("ENTER",), context={}).status == "match"
    blocked = resolver.resolve("jade", ("ENTER",), context={"read_only": True})
    assert blocked.status == "miss"


def test_resolver_prefers_higher_priority() -> None:
    low = make_binding("a.low", keys=("TAB",), action_id="jade.low")
    high = make_binding(
        "b.high",
        keys=("TAB",),
        action_id="jade.high",
        when=(WhenClause("indent_only"),),
        priority=5,
    )
    registry = KeymapRegistry()
    registry.register_action(make_action("jade.low"))
    registry.register_action(make_action("jade.high"))
    registry.register_binding(low)
    registry.register_binding(high)
    resolver = KeymapResolver(registry)

    result = resolver.resolve("jade", ("TAB",), context={"indent_only": True})

    assert result.match is not None
    assert result.match.action.id == "jade.high"


def test_resolver_pending_returns_timeout_hint() -> None:
    binding = make_binding("jade.outline", timeout_ms=1500)
    resolver = KeymapResolver(build_registry([binding]))

    result = resolver.resolve("jade", ("ctrl+c",))

    assert result.status == "pending"
    assert result.timeout_ms == 1500


def test_resolver_cache_refreshes_on_revision() -> None:
    registry = build_registry([])
    resolver = KeymapResolver(registry)
    assert resolver.resolve("jade", ("x",)).status == "miss"

    registry.register_action(make_action("jade.x"))
    registry.register_binding(make_binding("jade.x", keys=("x",), action_id="jade.x"))

    result = resolver.resolve("jade", ("x",))
    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == "jade.x"

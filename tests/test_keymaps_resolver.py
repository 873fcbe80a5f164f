from __future__ import annotations

from subword_engine.keymaps import (
    EDITOR_SCOPE,
    ActionRef,
    Binding,
    KeySequence,
    KeymapRegistry,
    KeymapResolver,
    WhenClause,
    load_default_keymaps,
)
from subword_engine.runtime.context_flags import (
    EXISTS_INVERTED_SELECTION,
    EXISTS_NON_INVERTED_SELECTION,
)


def make_action(action_id: str) -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    binding_id: str,
    *,
    scope: str = EDITOR_SCOPE,
    keys: tuple[str, ...] = ("ctrl+k", "ctrl+right"),
    action_id: str = "subword.test",
    when: tuple[WhenClause, ...] = (),
    priority: int = 0,
    timeout_ms: int = 1000,
) -> Binding:
    return Binding(
        id=binding_id,
        scope=scope,
        sequence=KeySequence.parse(*keys, timeout_ms=timeout_ms),
        action_id=action_id,
        when=when,
        priority=priority,
    )


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    action_ids = {binding.action_id for binding in bindings}
    for action_id in action_ids:
        registry.register_action(make_action(action_id))
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_resolver_matches_exact_sequence() -> None:
    binding = make_binding("editor.chord")
    resolver = KeymapResolver(build_registry([binding]))

    result = resolver.resolve(EDITOR_SCOPE, ("ctrl+k", "ctrl+right"))

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == binding.id


def test_resolver_reports_pending_for_prefix() -> None:
    resolver = KeymapResolver(build_registry([make_binding("editor.chord")]))

    result = resolver.resolve(EDITOR_SCOPE, ("ctrl+k",))

    assert result.status == "pending"
    assert result.next_expected == ("ctrl+right",)


def test_resolver_pending_returns_timeout_hint() -> None:
    binding = make_binding("editor.chord", timeout_ms=1500)
    resolver = KeymapResolver(build_registry([binding]))

    result = resolver.resolve(EDITOR_SCOPE, ("ctrl+k",))

    assert result.status == "pending"
    assert result.timeout_ms == 1500


def test_resolver_misses_other_scopes() -> None:
    resolver = KeymapResolver(build_registry([make_binding("editor.chord")]))

    result = resolver.resolve("panel", ("ctrl+k",))

    assert result.status == "miss"


def test_resolver_honors_when_clauses() -> None:
    gating = make_binding(
        "editor.gated",
        keys=("escape",),
        when=(WhenClause(EXISTS_INVERTED_SELECTION),),
        action_id="subword.drop",
    )
    resolver = KeymapResolver(build_registry([gating]))

    miss = resolver.resolve(EDITOR_SCOPE, ("escape",), context={})
    assert miss.status == "miss"

    hit = resolver.resolve(
        EDITOR_SCOPE, ("escape",), context={EXISTS_INVERTED_SELECTION: True}
    )
    assert hit.status == "match"
    assert hit.match is not None
    assert hit.match.binding.id == gating.id


def test_resolver_prefers_higher_priority() -> None:
    low = make_binding(
        "editor.low", keys=("f1",), action_id="subword.low", when=(WhenClause("a"),)
    )
    high = make_binding(
        "editor.high",
        keys=("f1",),
        action_id="subword.high",
        when=(WhenClause("b"),),
        priority=5,
    )
    resolver = KeymapResolver(build_registry([low, high]))

    result = resolver.resolve(EDITOR_SCOPE, ("f1",), context={"a": True, "b": True})

    assert result.match is not None
    assert result.match.binding.id == "editor.high"


def test_resolver_default_escape_follows_selection_flags() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry)

    idle = resolver.resolve(EDITOR_SCOPE, ("escape",), context={})
    assert idle.status == "miss"

    for flag in (EXISTS_INVERTED_SELECTION, EXISTS_NON_INVERTED_SELECTION):
        result = resolver.resolve(EDITOR_SCOPE, ("escape",), context={flag: True})
        assert result.match is not None
        assert result.match.action.id == "subword.dropSelections"


def test_resolver_cache_refreshes_on_revision() -> None:
    registry = build_registry([])
    resolver = KeymapResolver(registry)

    miss = resolver.resolve(EDITOR_SCOPE, ("x",))
    assert miss.status == "miss"

    new_binding = make_binding("editor.x", keys=("x",), action_id="subword.x")
    registry.register_action(make_action("subword.x"))
    registry.register_binding(new_binding)

    match = resolver.resolve(EDITOR_SCOPE, ("x",))
    assert match.status == "match"
    assert match.match is not None
    assert match.match.binding.id == new_binding.id

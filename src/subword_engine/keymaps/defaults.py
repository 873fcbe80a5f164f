"""Built-in subword commands and their default key bindings."""

from __future__ import annotations

import dataclasses
from typing import Iterable, Mapping, Sequence

from subword_engine.actions import subword as subword_actions
from subword_engine.runtime.context_flags import (
    EXISTS_INVERTED_SELECTION,
    EXISTS_NON_INVERTED_SELECTION,
)

from .models import ActionRef, Binding, KeySequence, WhenClause
from .registry import KeymapRegistry

EDITOR_SCOPE = "editor"

_DESCRIPTIONS = {
    "moveSubwordLeftExtend": "Extend selection to the previous subword boundary",
    "moveSubwordRightExtend": "Extend selection to the next subword boundary",
    "moveSubwordLeftNoExtend": "Move caret to the previous subword boundary",
    "moveSubwordRightNoExtend": "Move caret to the next subword boundary",
    "deleteSubwordLeft": "Delete the subword before the caret",
    "deleteSubwordRight": "Delete the subword after the caret",
    "dropSelections": "Collapse every selection to its active end",
}

DEFAULT_ACTIONS: tuple[ActionRef, ...] = tuple(
    ActionRef(
        id=subword_actions.command_id(name),
        handler=handler,
        description=_DESCRIPTIONS[name],
    )
    for name, handler in subword_actions.COMMANDS.items()
)


def _bind(
    binding_id: str, chord: str, command: str, *when: WhenClause
) -> Binding:
    return Binding(
        id=binding_id,
        sequence=KeySequence.parse(chord),
        action_id=subword_actions.command_id(command),
        scope=EDITOR_SCOPE,
        description=_DESCRIPTIONS[command],
        when=when,
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _bind("editor.subword_left", "ctrl+left", "moveSubwordLeftNoExtend"),
    _bind("editor.subword_right", "ctrl+right", "moveSubwordRightNoExtend"),
    _bind("editor.subword_left_extend", "ctrl+shift+left", "moveSubwordLeftExtend"),
    _bind(
        "editor.subword_right_extend", "ctrl+shift+right", "moveSubwordRightExtend"
    ),
    _bind("editor.delete_subword_left", "ctrl+backspace", "deleteSubwordLeft"),
    _bind("editor.delete_subword_right", "ctrl+delete", "deleteSubwordRight"),
    _bind(
        "editor.drop_inverted_selections",
        "escape",
        "dropSelections",
        WhenClause(EXISTS_INVERTED_SELECTION),
    ),
    _bind(
        "editor.drop_selections",
        "escape",
        "dropSelections",
        WhenClause(EXISTS_NON_INVERTED_SELECTION),
    ),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    default_sequence_timeout_ms: int | None = None,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    per_scope_overrides: Mapping[str, Iterable[Binding]] | None = None,
) -> None:
    """Register the subword commands and their default bindings.

    Bindings whose action was filtered out are skipped rather than failing.
    """

    allowed_actions = _build_filters(include_actions, exclude_actions)
    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    for action in DEFAULT_ACTIONS:
        if _selected(action.id, allowed_actions):
            registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if not _selected(binding.id, allowed_bindings):
            continue
        if not registry.has_action(binding.action_id):
            continue
        if default_sequence_timeout_ms is not None:
            binding = dataclasses.replace(
                binding,
                sequence=KeySequence(
                    binding.sequence.strokes, timeout_ms=default_sequence_timeout_ms
                ),
            )
        registry.register_binding(binding, replace=replace)

    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=replace)

    for scope, bindings in (per_scope_overrides or {}).items():
        for binding in bindings:
            if binding.scope != scope:
                raise ValueError(
                    f"Override binding '{binding.id}' must target scope '{scope}'"
                )
            registry.register_binding(binding, replace=True)


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    return include_set, set(exclude or ())


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    return item_id not in exclude


__all__ = [
    "EDITOR_SCOPE",
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "load_default_keymaps",
]

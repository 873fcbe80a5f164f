"""Registry owning command actions and their key bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from subword_engine.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    scopes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a new binding shadows an existing one in the same context."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        conflicts_tuple = tuple(conflicts)
        message = (
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts_tuple]}"
        )
        super().__init__(message)
        self.binding = binding
        self.conflicts = conflicts_tuple


class KeymapRegistry:
    """Stores actions by id and bindings indexed by scope and key signature."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        # scope -> key signature -> binding ids
        self._scope_index: Dict[str, Dict[str, set[str]]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def has_action(self, action_id: str) -> bool:
        return action_id in self._actions

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if not replace and action.id in self._actions:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "scope": binding.scope},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )

            conflicts = [
                c for c in self.detect_conflicts(binding) if c.id != binding.id
            ]
            if conflicts and not replace:
                handle.add_metadata(
                    "conflicts", ",".join(conflict.id for conflict in conflicts)
                )
                raise KeymapConflictError(binding, conflicts)

            if binding.id in self._bindings:
                if not replace:
                    raise ValueError(f"Binding id '{binding.id}' already registered")
                self._drop(self._bindings[binding.id])
            for conflict in conflicts:
                self._drop(conflict)

            self._bindings[binding.id] = binding
            self._index_binding(binding)
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.get(binding_id)
        if binding is None:
            return None
        self._drop(binding)
        self._revision += 1
        return binding

    def iter_actions(self) -> Iterator[ActionRef]:
        yield from self._actions.values()

    def iter_bindings(self, scope: Optional[str] = None) -> Iterator[Binding]:
        if scope is None:
            yield from self._bindings.values()
            return
        for bucket in self._scope_index.get(scope, {}).values():
            for binding_id in sorted(bucket):
                yield self._bindings[binding_id]

    def bindings_for_action(self, action_id: str) -> tuple[Binding, ...]:
        return tuple(b for b in self._bindings.values() if b.action_id == action_id)

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            scopes=tuple(sorted(self._scope_index)),
        )

    def detect_conflicts(self, binding: Binding) -> list[Binding]:
        bucket = self._scope_index.get(binding.scope, {}).get(
            binding.key_signature, set()
        )
        return [
            self._bindings[match_id]
            for match_id in sorted(bucket)
            if _contexts_overlap(binding, self._bindings[match_id])
        ]

    def _index_binding(self, binding: Binding) -> None:
        by_signature = self._scope_index.setdefault(binding.scope, {})
        by_signature.setdefault(binding.key_signature, set()).add(binding.id)

    def _drop(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        scope_bucket = self._scope_index.get(binding.scope)
        if not scope_bucket:
            return
        signatures = scope_bucket.get(binding.key_signature)
        if signatures is not None:
            signatures.discard(binding.id)
            if not signatures:
                scope_bucket.pop(binding.key_signature, None)
        if not scope_bucket:
            self._scope_index.pop(binding.scope, None)


def _contexts_overlap(left: Binding, right: Binding) -> bool:
    """Whether some flag assignment would enable both bindings at once.

    Two unconditional bindings always overlap. A conditional binding next to
    an unconditional one is treated as a more specific override. Two
    conditional bindings overlap only when their clauses are identical.
    """

    if not left.when and not right.when:
        return True
    if not left.when or not right.when:
        return False

    left_map = left.when_map
    right_map = right.when_map
    for flag, expected in left_map.items():
        if flag in right_map and right_map[flag] != expected:
            return False
    return dict(left_map) == dict(right_map)


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
]

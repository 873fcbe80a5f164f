"""Trie-based resolution of key tokens to registered commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Mapping, Optional, Sequence

from subword_engine.runtime.telemetry import span

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
    """Resolved binding paired with its action."""

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
    """Builds one trie per scope, rebuilt whenever the registry revision moves."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._cache: Dict[str, tuple[int, TrieNode]] = {}

    def resolve(
        self,
        scope: str,
        tokens: Sequence[str],
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        flags = context or {}
        normalized = tuple(tokens)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"scope": scope, "keys": " ".join(normalized)},
        ) as handle:
            node = self._trie(scope)
            for consumed, token in enumerate(normalized):
                child = node.children.get(token)
                if child is None:
                    handle.add_metadata("status", "miss")
                    return ResolutionResult(status="miss", consumed=consumed)
                node = child

            match = self._select_match(node, flags)
            if match is not None:
                handle.add_metadata("status", "match")
                handle.add_metadata("binding_id", match.binding.id)
                return ResolutionResult(
                    status="match", match=match, consumed=len(normalized)
                )

            if node.children:
                timeouts = [
                    self._registry.get_binding(binding_id).sequence.timeout_ms
                    for binding_id in node.descendant_bindings()
                ]
                handle.add_metadata("status", "pending")
                return ResolutionResult(
                    status="pending",
                    consumed=len(normalized),
                    next_expected=node.next_tokens(),
                    timeout_ms=min(timeouts) if timeouts else None,
                )

            handle.add_metadata("status", "miss")
            return ResolutionResult(status="miss", consumed=len(normalized))

    def reset(self, scope: Optional[str] = None) -> None:
        if scope is None:
            self._cache.clear()
        else:
            self._cache.pop(scope, None)

    def _trie(self, scope: str) -> TrieNode:
        revision = self._registry.revision()
        cached = self._cache.get(scope)
        if cached and cached[0] == revision:
            return cached[1]

        root = TrieNode()
        for binding in self._registry.iter_bindings(scope):
            node = root
            for token in binding.sequence.tokens:
                node = node.child(token)
            node.bindings.append(binding.id)
        self._cache[scope] = (revision, root)
        return root

    def _select_match(
        self, node: TrieNode, context: Mapping[str, bool]
    ) -> Optional[ResolutionMatch]:
        candidates = [
            self._registry.get_binding(binding_id) for binding_id in node.bindings
        ]
        allowed = [binding for binding in candidates if binding.allows(context)]
        if not allowed:
            return None
        # Higher priority first, then the binding with more when-clauses.
        allowed.sort(key=lambda b: (-b.priority, -len(b.when), b.id))
        best = allowed[0]
        return ResolutionMatch(
            binding=best, action=self._registry.get_action(best.action_id)
        )


__all__ = [
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]

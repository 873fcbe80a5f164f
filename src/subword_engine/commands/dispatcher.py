"""Dispatcher turning key presses and command ids into subword edits."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import List, Optional

from subword_engine.keymaps import (
    EDITOR_SCOPE,
    KeymapRegistry,
    KeymapResolver,
    KeyStroke,
    ResolutionMatch,
    load_default_keymaps,
)
from subword_engine.motions import InvariantViolation
from subword_engine.runtime import context_flags as flags_module
from subword_engine.runtime import telemetry

from .base import CommandContext, CommandResult, KeyInput


@dataclass
class PendingSequence:
    tokens: List[str]
    deadline: float
    timeout_ms: int


def key_to_token(key: KeyInput) -> str:
    return KeyStroke(key.key, key.modifiers).token


class CommandDispatcher:
    """Owns the keymaps for one editor and runs commands against it.

    Creating a dispatcher subscribes its context flags to the editor's
    selection changes, so when-clauses always see the current selection set.
    """

    def __init__(
        self,
        context: CommandContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
        scope: str = EDITOR_SCOPE,
        default_pending_timeout_ms: int = 1000,
    ) -> None:
        self.context = context
        self.scope = scope
        self.logger = telemetry.get_logger("subword_engine.commands")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="subword_engine.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="subword_engine.keymaps"
        )
        self._pending: Optional[PendingSequence] = None
        self._default_timeout_ms = default_pending_timeout_ms
        self._unsubscribe = flags_module.install(context.editor, context.flags)

    @property
    def pending_tokens(self) -> tuple[str, ...]:
        return tuple(self._pending.tokens) if self._pending else ()

    def close(self) -> None:
        """Stop tracking the editor's selections."""

        self._unsubscribe()

    def execute(self, action_id: str) -> CommandResult:
        """Run a registered command directly, bypassing key resolution."""

        action = self.keymap_registry.get_action(action_id)
        return self._run(action_id, lambda: action(self.context, None))

    def handle_key(self, key: KeyInput) -> CommandResult:
        tokens = [*self.pending_tokens, key_to_token(key)]
        result = self.keymap_resolver.resolve(
            self.scope, tokens, context=self.context.flags.snapshot()
        )

        if result.status == "match" and result.match:
            self._pending = None
            return self._execute_match(result.match)

        if result.status == "pending":
            timeout_ms = result.timeout_ms or self._default_timeout_ms
            self._pending = PendingSequence(
                tokens=tokens,
                deadline=time.monotonic() + timeout_ms / 1000.0,
                timeout_ms=timeout_ms,
            )
            return CommandResult(
                consumed=True,
                status="pending",
                message="awaiting_sequence",
                timeout_ms=timeout_ms,
            )

        self._pending = None
        return CommandResult(consumed=False, status="unbound")

    def process_timeouts(self, *, now: float | None = None) -> Optional[CommandResult]:
        """Drop an expired multi-key prefix; returns None when nothing expired."""

        if self._pending is None:
            return None
        current = time.monotonic() if now is None else now
        if current < self._pending.deadline:
            return None
        tokens = " ".join(self._pending.tokens)
        self._pending = None
        telemetry.record_event("keymaps.timeout", data={"keys": tokens})
        return CommandResult(consumed=False, status="timeout", message=tokens)

    def _execute_match(self, match: ResolutionMatch) -> CommandResult:
        return self._run(
            match.action.id,
            lambda: match.action(self.context, match),
            binding_id=match.binding.id,
        )

    def _run(
        self, action_id: str, invoke, *, binding_id: str | None = None
    ) -> CommandResult:
        metadata = {"action": action_id}
        if binding_id:
            metadata["binding_id"] = binding_id
        try:
            with telemetry.span(
                f"command::{action_id}", component="commands", metadata=metadata
            ):
                outcome = invoke()
        except InvariantViolation as exc:
            # The motion layer computes every position before mutating the
            # editor, so the buffer is untouched here.
            telemetry.record_event(
                "command.invariant_violation",
                level="error",
                data={"action": action_id, "reason": str(exc), **exc.detail},
            )
            return CommandResult(
                consumed=True, status="invariant_violation", message=str(exc)
            )

        if isinstance(outcome, CommandResult):
            return outcome
        return CommandResult(consumed=True)


__all__ = ["CommandDispatcher", "PendingSequence", "key_to_token"]

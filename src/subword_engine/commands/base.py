"""Shared value types and services handed to every command."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from subword_engine.buffer import EditorAdapter
from subword_engine.runtime.context_flags import ContextFlags, context_flags


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to the dispatcher."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None


@dataclass(slots=True)
class CommandResult:
    """Outcome of a dispatched key or command."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None
    timeout_ms: Optional[int] = None


class CommandBus:
    """Minimal event bus letting commands publish structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class CommandContext:
    """Editor host plus the services commands may touch.

    ``word_chars`` extends the word alphabet for this editor session.
    """

    editor: EditorAdapter
    bus: CommandBus = field(default_factory=CommandBus)
    flags: ContextFlags = field(default_factory=lambda: context_flags)
    word_chars: str = ""
    extras: Dict[str, object] = field(default_factory=dict)


__all__ = ["KeyInput", "CommandResult", "CommandBus", "CommandContext"]

"""Process-wide boolean flags derived from the current selection set."""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Dict, Iterable, Mapping, Optional

from subword_engine.buffer import EditorAdapter, Selection

from . import telemetry

EXISTS_INVERTED_SELECTION = "existsInvertedSelection"
EXISTS_NON_INVERTED_SELECTION = "existsNonInvertedSelection"


class ContextFlags:
    """Named booleans read by keybinding when-clauses and host UI logic."""

    def __init__(self) -> None:
        self._values: Dict[str, bool] = {
            EXISTS_INVERTED_SELECTION: False,
            EXISTS_NON_INVERTED_SELECTION: False,
        }

    def get(self, name: str) -> bool:
        return self._values.get(name, False)

    def set(self, name: str, value: bool) -> None:
        value = bool(value)
        if self._values.get(name) is value:
            return
        self._values[name] = value
        telemetry.record_event(
            "context.flag", level="debug", data={"name": name, "value": value}
        )

    def snapshot(self) -> Mapping[str, bool]:
        return MappingProxyType(dict(self._values))

    def update_from_selections(self, selections: Iterable[Selection]) -> None:
        selections = tuple(selections)
        self.set(EXISTS_INVERTED_SELECTION, any(s.is_inverted for s in selections))
        self.set(
            EXISTS_NON_INVERTED_SELECTION,
            any(s.is_non_inverted for s in selections),
        )


context_flags = ContextFlags()


def install(
    editor: EditorAdapter, flags: Optional[ContextFlags] = None
) -> Callable[[], None]:
    """Keep ``flags`` in sync with ``editor``; returns the unsubscribe hook."""

    target = flags if flags is not None else context_flags
    target.update_from_selections(editor.get_selections())
    return editor.on_selection_changed(target.update_from_selections)


__all__ = [
    "EXISTS_INVERTED_SELECTION",
    "EXISTS_NON_INVERTED_SELECTION",
    "ContextFlags",
    "context_flags",
    "install",
]

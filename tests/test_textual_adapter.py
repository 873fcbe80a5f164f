from __future__ import annotations

from typing import Any, Dict, List, Mapping

import pytest

from subword_engine.adapters.textual import (
    TextualSubwordAdapter,
    TextualUIHooks,
    render_buffer,
)
from subword_engine.buffer import Buffer, BufferMirror, Position, Selection
from subword_engine.commands import CommandContext
from subword_engine.commands.dispatcher import CommandDispatcher
from subword_engine.runtime.context_flags import (
    EXISTS_NON_INVERTED_SELECTION,
    ContextFlags,
)


class FakeEditor:
    def get_selections(self):
        return (Selection.caret(Position(0, 0)),)

    def on_selection_changed(self, listener):
        return lambda: None


def make_dispatcher(text: str = "fooBarBaz") -> CommandDispatcher:
    context = CommandContext(editor=Buffer.from_text(text), flags=ContextFlags())
    return CommandDispatcher(context)


def test_adapter_updates_buffer_and_status() -> None:
    updates: List[str] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: updates.append(render_buffer(mirror)),
        update_status=lambda status: statuses.append(status),
    )
    adapter = TextualSubwordAdapter(make_dispatcher(), hooks)

    adapter.handle_textual_key("right", modifiers=("CTRL",))

    assert updates == ["|fooBarBaz", "foo|BarBaz"]
    assert statuses == ["subword_move"]


def test_adapter_inserts_unbound_printable_text() -> None:
    hooks = TextualUIHooks(update_buffer=lambda mirror: None)
    adapter = TextualSubwordAdapter(make_dispatcher("Bar"), hooks)

    result = adapter.handle_textual_key("f", text="f")

    assert result.status == "insert_text"
    assert adapter.buffer.text == "fBar"


def test_adapter_ignores_unbound_modified_keys() -> None:
    hooks = TextualUIHooks(update_buffer=lambda mirror: None)
    adapter = TextualSubwordAdapter(make_dispatcher("Bar"), hooks)

    result = adapter.handle_textual_key("x", text="x", modifiers=("ctrl",))

    assert not result.consumed
    assert result.status == "unbound"
    assert adapter.buffer.text == "Bar"


def test_adapter_relays_command_events() -> None:
    events: List[Dict[str, Any]] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None,
        handle_event=lambda name, payload: events.append(
            {"name": name, "payload": payload}
        ),
    )
    adapter = TextualSubwordAdapter(make_dispatcher(), hooks)
    adapter.buffer.set_carets(9)

    adapter.handle_textual_key("backspace", modifiers=("ctrl",))

    assert [event["name"] for event in events] == ["subword.delete"]
    assert events[-1]["payload"] == {"direction": -1, "deleted": ["Baz"]}


def test_adapter_publishes_flags() -> None:
    flags: List[Mapping[str, bool]] = []
    mirrors: List[BufferMirror] = []
    hooks = TextualUIHooks(
        update_buffer=mirrors.append,
        update_flags=flags.append,
    )
    adapter = TextualSubwordAdapter(make_dispatcher(), hooks)

    adapter.handle_textual_key("right", modifiers=("ctrl", "shift"))

    assert flags[-1][EXISTS_NON_INVERTED_SELECTION] is True
    assert mirrors[-1].attributes[EXISTS_NON_INVERTED_SELECTION] == "true"
    assert render_buffer(mirrors[-1]) == "[foo]BarBaz"


def test_adapter_emits_log_lines() -> None:
    logs: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None,
        log=lambda line: logs.append(line),
    )
    adapter = TextualSubwordAdapter(make_dispatcher(), hooks)

    adapter.handle_textual_key("left", modifiers=("ctrl",))

    assert any(line.startswith("key ->") for line in logs)
    assert any(line.startswith("result <-") for line in logs)
    assert any(line.startswith("event ->") for line in logs)


def test_adapter_requires_buffer_editor() -> None:
    context = CommandContext(editor=FakeEditor(), flags=ContextFlags())
    dispatcher = CommandDispatcher(context)
    hooks = TextualUIHooks(update_buffer=lambda mirror: None)

    with pytest.raises(TypeError):
        TextualSubwordAdapter(dispatcher, hooks)


def test_render_buffer_marks_carets_and_selections() -> None:
    mirror = BufferMirror(
        text="ab\ncd",
        selections=(
            Selection.caret(Position(0, 1)),
            Selection(Position(1, 2), Position(1, 0)),
        ),
        version=0,
        attributes={},
    )

    assert render_buffer(mirror) == "a|b\n[cd]"

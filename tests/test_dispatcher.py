from __future__ import annotations

import pytest

from subword_engine.actions import command_id
from subword_engine.buffer import Buffer
from subword_engine.commands import CommandContext, KeyInput
from subword_engine.commands.dispatcher import CommandDispatcher, key_to_token
from subword_engine.keymaps import Binding, KeymapRegistry, KeySequence, load_default_keymaps
from subword_engine.motions import InvariantViolation
from subword_engine.runtime.context_flags import (
    EXISTS_INVERTED_SELECTION,
    EXISTS_NON_INVERTED_SELECTION,
    ContextFlags,
)


def make_dispatcher(
    text: str, *carets: int, registry: KeymapRegistry | None = None
) -> CommandDispatcher:
    buffer = Buffer.from_text(text)
    if carets:
        buffer.set_carets(*carets)
    context = CommandContext(editor=buffer, flags=ContextFlags())
    return CommandDispatcher(context, keymap_registry=registry)


def press(dispatcher: CommandDispatcher, chord: str):
    *modifiers, key = chord.split("+")
    return dispatcher.handle_key(KeyInput(key=key, modifiers=tuple(modifiers)))


def carets(dispatcher: CommandDispatcher) -> list[int]:
    editor = dispatcher.context.editor
    return [editor.offset_at(s.active) for s in editor.get_selections()]


def test_key_to_token_normalizes_modifiers() -> None:
    assert key_to_token(KeyInput(key="Left", modifiers=("shift", "ctrl"))) == (
        "ctrl+shift+left"
    )


def test_execute_runs_command_by_id() -> None:
    dispatcher = make_dispatcher("fooBarBaz")

    result = dispatcher.execute(command_id("moveSubwordRightNoExtend"))

    assert result.consumed
    assert result.status == "subword_move"
    assert carets(dispatcher) == [3]


def test_execute_unknown_command_raises() -> None:
    dispatcher = make_dispatcher("fooBarBaz")

    with pytest.raises(KeyError):
        dispatcher.execute("subword.doesNotExist")


def test_ctrl_arrows_move_between_subwords() -> None:
    dispatcher = make_dispatcher("item2Count")

    press(dispatcher, "ctrl+right")
    press(dispatcher, "ctrl+right")
    assert carets(dispatcher) == [5]

    press(dispatcher, "ctrl+left")
    assert carets(dispatcher) == [4]


def test_delete_keys_report_deleted_text() -> None:
    dispatcher = make_dispatcher("fooBarBaz", 9)

    result = press(dispatcher, "ctrl+backspace")

    assert result.status == "subword_delete"
    assert result.message == "Baz"
    assert dispatcher.context.editor.text == "fooBar"

    dispatcher.context.editor.set_carets(0)
    result = press(dispatcher, "ctrl+delete")
    assert result.message == "foo"
    assert dispatcher.context.editor.text == "Bar"


def test_escape_is_unbound_without_selection() -> None:
    dispatcher = make_dispatcher("fooBar")

    result = press(dispatcher, "escape")

    assert not result.consumed
    assert result.status == "unbound"


def test_escape_drops_non_inverted_selection() -> None:
    dispatcher = make_dispatcher("fooBar")

    press(dispatcher, "ctrl+shift+right")
    assert dispatcher.context.flags.get(EXISTS_NON_INVERTED_SELECTION)

    result = press(dispatcher, "escape")

    assert result.status == "drop_selections"
    assert carets(dispatcher) == [3]
    assert not dispatcher.context.flags.get(EXISTS_NON_INVERTED_SELECTION)


def test_extending_left_sets_inverted_flag() -> None:
    dispatcher = make_dispatcher("fooBar", 6)

    press(dispatcher, "ctrl+shift+left")

    assert dispatcher.context.flags.get(EXISTS_INVERTED_SELECTION)
    assert not dispatcher.context.flags.get(EXISTS_NON_INVERTED_SELECTION)

    press(dispatcher, "escape")
    assert not dispatcher.context.flags.get(EXISTS_INVERTED_SELECTION)


def test_invariant_violation_leaves_buffer_untouched(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    dispatcher = make_dispatcher("fooBarBaz", 8)
    editor = dispatcher.context.editor
    before = editor.get_selections()

    def broken(*args, **kwargs):
        raise InvariantViolation("scan escaped the line", detail={"offset": 8})

    monkeypatch.setattr(
        "subword_engine.actions.cursor_ops.move_position_subword", broken
    )

    result = press(dispatcher, "ctrl+backspace")

    assert result.consumed
    assert result.status == "invariant_violation"
    assert result.message == "scan escaped the line"
    assert editor.text == "fooBarBaz"
    assert editor.get_selections() == before


def chord_registry(timeout_ms: int = 500) -> KeymapRegistry:
    registry = KeymapRegistry()
    load_default_keymaps(
        registry,
        extra_bindings=[
            Binding(
                id="editor.chord_right",
                sequence=KeySequence.parse("ctrl+k", "ctrl+right", timeout_ms=timeout_ms),
                action_id=command_id("moveSubwordRightExtend"),
            )
        ],
    )
    return registry


def test_multi_key_sequence_waits_then_matches() -> None:
    dispatcher = make_dispatcher("fooBar", registry=chord_registry())

    pending = press(dispatcher, "ctrl+k")
    assert pending.status == "pending"
    assert pending.timeout_ms == 500
    assert dispatcher.pending_tokens == ("ctrl+k",)

    result = press(dispatcher, "ctrl+right")
    assert result.status == "subword_extend"
    assert dispatcher.pending_tokens == ()


def test_pending_sequence_times_out() -> None:
    dispatcher = make_dispatcher("fooBar", registry=chord_registry())
    press(dispatcher, "ctrl+k")

    assert dispatcher.process_timeouts(now=0.0) is None
    expired = dispatcher.process_timeouts(now=float("inf"))

    assert expired is not None
    assert expired.status == "timeout"
    assert expired.message == "ctrl+k"
    assert dispatcher.pending_tokens == ()
    assert dispatcher.process_timeouts(now=float("inf")) is None


def test_close_stops_flag_tracking() -> None:
    dispatcher = make_dispatcher("fooBar")
    dispatcher.close()

    press(dispatcher, "ctrl+shift+right")

    assert not dispatcher.context.flags.get(EXISTS_NON_INVERTED_SELECTION)

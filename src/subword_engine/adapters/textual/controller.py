"""Adapter wiring the command dispatcher into Textual-style UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Mapping, Optional

from subword_engine.buffer import Buffer, BufferMirror, TextDocument
from subword_engine.commands import CommandResult, KeyInput
from subword_engine.commands.dispatcher import CommandDispatcher


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    update_flags: Callable[[Mapping[str, bool]], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualSubwordAdapter:
    """Bridges key events and bus events to a Textual-friendly surface.

    Keys that no binding claims are treated as typing: printable text is
    inserted at every caret of the underlying :class:`Buffer`.
    """

    def __init__(self, dispatcher: CommandDispatcher, hooks: TextualUIHooks) -> None:
        self.dispatcher = dispatcher
        self.hooks = hooks
        editor = dispatcher.context.editor
        if not isinstance(editor, Buffer):
            raise TypeError("TextualSubwordAdapter requires a Buffer editor")
        self.buffer: Buffer = editor
        self._subscribe_events()
        self._refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> CommandResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        normalized_modifiers = tuple(str(mod).lower() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        result = self.dispatcher.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        if not result.consumed and result.status == "unbound":
            result = self._type_text(text, normalized_modifiers)
        self._after_result(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
        )
        return result

    def process_timeouts(self) -> Optional[CommandResult]:
        outcome = self.dispatcher.process_timeouts()
        if outcome is not None:
            self.hooks.update_status(f"{outcome.status}:{outcome.message}")
            self._log_state("timeout ->", status=outcome.status)
        return outcome

    def _type_text(
        self, text: Optional[str], modifiers: tuple[str, ...]
    ) -> CommandResult:
        if not text or not text.isprintable() or {"ctrl", "alt"} & set(modifiers):
            return CommandResult(consumed=False, status="unbound")
        self.buffer.insert_text(text)
        return CommandResult(consumed=True, status="insert_text")

    def _after_result(self, result: CommandResult) -> None:
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        self._refresh()

    def _subscribe_events(self) -> None:
        bus = self.dispatcher.context.bus
        for event in ("subword.move", "subword.delete", "subword.drop"):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name)
        self.hooks.handle_event(name, payload)

    def _refresh(self) -> None:
        flags = self.dispatcher.context.flags.snapshot()
        attributes = {key: str(value).lower() for key, value in flags.items()}
        self.hooks.update_buffer(self.buffer.mirror(attributes=attributes))
        self.hooks.update_flags(flags)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        return {
            "buffer": self.buffer.name,
            "version": self.buffer.document.version,
            "selections": len(self.buffer.get_selections()),
            "pending": " ".join(self.dispatcher.pending_tokens),
        }


def render_buffer(mirror: BufferMirror) -> str:
    """Plain text with ``|`` at carets and ``[``/``]`` around selections."""

    document = TextDocument.from_text(mirror.text)
    markers: Dict[int, str] = {}
    for selection in mirror.selections:
        if selection.is_empty:
            offset = document.offset_at(selection.active)
            markers[offset] = markers.get(offset, "") + "|"
            continue
        start = document.offset_at(selection.start)
        end = document.offset_at(selection.end)
        markers[start] = markers.get(start, "") + "["
        markers[end] = "]" + markers.get(end, "")
    pieces = []
    cursor = 0
    for offset in sorted(markers):
        pieces.append(mirror.text[cursor:offset])
        pieces.append(markers[offset])
        cursor = offset
    pieces.append(mirror.text[cursor:])
    return "".join(pieces)


__all__ = ["TextualSubwordAdapter", "TextualUIHooks", "render_buffer"]

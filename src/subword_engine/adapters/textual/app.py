"""Executable Textual app demonstrating subword navigation."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Mapping, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use subword_engine.adapters.textual.app"
    ) from exc

from subword_engine.buffer import Buffer, BufferMirror
from subword_engine.commands import CommandContext
from subword_engine.commands.dispatcher import CommandDispatcher
from subword_engine.runtime.context_flags import ContextFlags

from .controller import TextualSubwordAdapter, TextualUIHooks, render_buffer

SAMPLE_TEXT = """\
const fooBarBaz = item2Count + some_snake_case;
color: #ff00aa;   border-color: #DeadBeef;
if (a || b && c) { parseHTTPResponse(kebab-case-name); }
"""


def create_default_dispatcher(text: str = "", *, word_chars: str = "") -> CommandDispatcher:
    """Build a dispatcher over a fresh buffer with the default keymaps."""

    buffer = Buffer.from_text(text, name="demo")
    context = CommandContext(
        editor=buffer, flags=ContextFlags(), word_chars=word_chars
    )
    return CommandDispatcher(context)


class SubwordEditorApp(App[None]):
    """Minimal Textual UI hosting one subword-aware buffer."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#flags-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+z", "undo", "Undo"),
        ("ctrl+y", "redo", "Redo"),
    ]

    def __init__(self, *, text: str = SAMPLE_TEXT, word_chars: str = "") -> None:
        super().__init__()
        self._text = text
        self._word_chars = word_chars
        self.adapter: TextualSubwordAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._flags_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view", markup=False)
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line", markup=False)
        self._flags_widget = Static("", id="flags-line", markup=False)
        yield self._status_widget
        yield self._flags_widget
        yield Footer()

    def on_mount(self) -> None:
        dispatcher = create_default_dispatcher(
            self._text, word_chars=self._word_chars
        )
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            update_flags=self._update_flags,
            log=self.log.debug,
        )
        self.adapter = TextualSubwordAdapter(dispatcher, hooks)
        self.set_interval(0.1, self._process_timeouts)

    def on_unmount(self) -> None:
        if self.adapter:
            self.adapter.dispatcher.close()

    def action_undo(self) -> None:
        self._history("undo")

    def action_redo(self) -> None:
        self._history("redo")

    def _history(self, name: str) -> None:
        if not self.adapter:
            return
        buffer = self.adapter.buffer
        changed = buffer.undo() if name == "undo" else buffer.redo()
        self._update_status(name if changed else f"nothing to {name}")
        self._update_buffer(buffer.mirror())

    def _process_timeouts(self) -> None:
        if self.adapter:
            self.adapter.process_timeouts()

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        result = self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        if result.consumed:
            event.stop()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_buffer(mirror))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _update_flags(self, flags: Mapping[str, bool]) -> None:
        if self._flags_widget:
            self._flags_widget.update(
                "  ".join(f"{name}={value}" for name, value in sorted(flags.items()))
            )

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        if event.key in {"ctrl+q", "ctrl+z", "ctrl+y"}:
            return None
        *modifiers, key = event.key.split("+") if event.key != "+" else ["+"]
        text = event.character if event.is_printable else None
        return (key, text, tuple(modifiers))


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the subword navigation demo.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--text", help="Initial buffer contents")
    source.add_argument("--file", type=Path, help="Load the buffer from a file")
    parser.add_argument(
        "--word-chars",
        default=os.environ.get("SUBWORD_ENGINE_WORD_CHARS", ""),
        help="Extra characters treated as part of words (e.g. '$@')",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.file is not None:
        text = args.file.read_text(encoding="utf-8")
    elif args.text is not None:
        text = args.text
    else:
        text = SAMPLE_TEXT
    SubwordEditorApp(text=text, word_chars=args.word_chars).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()

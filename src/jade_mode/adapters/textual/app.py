"""Textual demo app editing a single Jade file with the mode attached."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use jade_mode.adapters.textual.app"
    ) from exc

from jade_mode.buffer import Buffer, BufferMirror
from jade_mode.config import load_settings
from jade_mode.engine import FunctionDefinition
from jade_mode.registration import create_jade_mode

from .controller import TextualJadeAdapter, TextualUIHooks, normalize_textual_key


@dataclass
class UIState:
    buffer_text: str = ""
    status_text: str = ""
    outline_text: str = ""


def render_buffer(mirror: BufferMirror) -> str:
    """Buffer text with a ``|`` marking the cursor."""

    lines = mirror.text.split("\n")
    row, col = mirror.cursor
    lines[row] = lines[row][:col] + "|" + lines[row][col:]
    return "\n".join(lines)


def render_outline(entries: Sequence[FunctionDefinition]) -> str:
    return "\n".join(f"{entry.line + 1:>4}  {entry.name}" for entry in entries)


class JadeModeApp(App[None]):
    CSS = """
	#buffer-view {
		width: 3fr;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#outline-view {
		width: 1fr;
		border: round $secondary;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+s", "save", "Save"),
    ]

    def __init__(self, path: Optional[Path] = None) -> None:
        super().__init__()
        self.path = path
        self._state = UIState()
        self.adapter: TextualJadeAdapter | None = None
        self._buffer_widget: Static | None = None
        self._outline_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        with Horizontal():
            self._buffer_widget = Static("", id="buffer-view")
            self._outline_widget = Static("", id="outline-view")
            yield self._buffer_widget
            yield self._outline_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        settings = load_settings()
        text = ""
        if self.path is not None and self.path.exists():
            text = self.path.read_text(encoding="utf-8")
        name = self.path.name if self.path else "scratch.jade"
        mode = create_jade_mode(Buffer.from_text(text, name=name), settings=settings)
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            show_outline=self._show_outline,
        )
        self.adapter = TextualJadeAdapter(mode, hooks)
        if not settings.matches_file(name):
            self._update_status(f"{name}: not a Jade file, mode attached anyway")
        self.set_interval(0.1, self._process_timeouts)

    def _process_timeouts(self) -> None:
        if self.adapter:
            self.adapter.process_timeouts()

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key in {"ctrl+q", "ctrl+s"}:
            return
        key, text, modifiers = normalize_textual_key(
            event.key, event.character, printable=event.is_printable
        )
        result = self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        if result.consumed:
            event.stop()
            event.prevent_default()

    def action_save(self) -> None:
        if self.adapter is None or self.path is None:
            self._update_status("nothing to save")
            return
        self.path.write_text(self.adapter.mode.context.buffer.text, encoding="utf-8")
        self._update_status(f"wrote {self.path}")

    def _update_buffer(self, mirror: BufferMirror) -> None:
        self._state.buffer_text = render_buffer(mirror)
        if self._buffer_widget:
            self._buffer_widget.update(self._state.buffer_text)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _show_outline(self, entries: Sequence[FunctionDefinition]) -> None:
        self._state.outline_text = render_outline(entries)
        if self._outline_widget:
            self._outline_widget.update(self._state.outline_text)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit a Jade file in a terminal UI.")
    parser.add_argument("path", nargs="?", type=Path, help="File to open")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    JadeModeApp(path=args.path).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()

"""Executable Textual app demonstrating a tracked counter with undo/redo."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use history_engine.adapters.textual.app"
    ) from exc

from history_engine.config import HistoryConfig
from history_engine.keymaps import HISTORY_SHORTCUTS
from history_engine.timeline import StateHistoryManager, TimelineSnapshot

from .controller import TextualHistoryAdapter, TextualUIHooks

STEP_KEYS = {"+": 1, "=": 1, "-": -1, "_": -1}


def help_text() -> str:
    rows = [f"{spec.label}: {spec.description}" for spec in HISTORY_SHORTCUTS]
    rows.append("+/-: change value   r: clear history")
    return "\n".join(rows)


@dataclass
class UIState:
    value_text: str = ""
    status_text: str = ""


class CounterHistoryApp(App[None]):
    """Minimal Textual UI around a ``StateHistoryManager[int]``."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#counter-view {
		height: 1fr;
		border: round $accent;
		padding: 1 2;
		content-align: center middle;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#help-text {
		height: auto;
		padding: 0 1;
		color: $text-muted;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, initial: int = 0, config: HistoryConfig | None = None) -> None:
        super().__init__()
        self._state = UIState()
        self.manager: StateHistoryManager[int] = StateHistoryManager(
            initial, config=config, name="counter"
        )
        self.adapter: TextualHistoryAdapter | None = None
        self._value_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="counter-area"):
            self._value_widget = Static("", id="counter-view")
            yield self._value_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Static(help_text(), id="help-text")
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            render_state=self._render_state,
            update_status=self._update_status,
        )
        self.adapter = TextualHistoryAdapter(self.manager, hooks)

    def on_unmount(self) -> None:
        if self.adapter is not None:
            self.adapter.close()
            self.adapter = None

    def on_key(self, event: events.Key) -> None:
        if self.adapter is None:
            return
        if self.adapter.handle_textual_key(event.key):
            event.prevent_default()
            event.stop()
            return
        if event.character in STEP_KEYS:
            self.manager.set(self.manager.state + STEP_KEYS[event.character])
            event.stop()
        elif event.character == "r":
            self.manager.clear()
            event.stop()

    def _render_state(self, snapshot: TimelineSnapshot[Any]) -> None:
        self._state.value_text = str(snapshot.present)
        if self._value_widget:
            self._value_widget.update(self._state.value_text)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the history engine Textual demo.")
    parser.add_argument(
        "--max-history",
        type=int,
        default=None,
        help="Maximum undo depth (default: HISTORY_ENGINE_MAX_HISTORY or 50)",
    )
    parser.add_argument(
        "--initial",
        type=int,
        default=0,
        help="Starting counter value (default: 0)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    config = (
        HistoryConfig(max_history=args.max_history)
        if args.max_history is not None
        else HistoryConfig.from_env()
    )
    app = CounterHistoryApp(initial=args.initial, config=config)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()

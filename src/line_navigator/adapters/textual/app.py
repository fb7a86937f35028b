"""Executable Textual app demonstrating the line navigator."""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.widgets import Footer, Header, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use line_navigator.adapters.textual.app"
    ) from exc

from line_navigator.config import NavigatorConfig
from line_navigator.host import Position
from line_navigator.integration import (
    attached_feature,
    create_session,
    set_line_navigator,
)
from line_navigator.runtime import telemetry

from .controller import TextualNavigatorAdapter, TextualUIHooks
from .host import TextAreaHost

ROUTED_KEYS = (
    "left",
    "right",
    "ctrl+left",
    "ctrl+right",
    "alt+left",
    "alt+right",
    "ctrl+up",
    "ctrl+down",
)

SAMPLE_TEXT = """\
def scroll(cm, pos):  # try ctrl+left / ctrl+right here
    first = round(info.top / line.height)

    if first >= pos.line:
        cm.set_cursor(first + 1, 0)
"""


class NavigatorTextArea(TextArea):
    """TextArea whose cursor keys go through the navigator session."""

    BINDINGS = [
        Binding(key, f"navigator_key('{key}')", show=False, priority=True)
        for key in ROUTED_KEYS
    ]

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.adapter: TextualNavigatorAdapter | None = None

    def action_navigator_key(self, key: str) -> None:
        if self.adapter is not None:
            self.adapter.handle_textual_key(key)


class LineNavigatorApp(App[None]):
    """Minimal Textual UI embedding the navigator."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #editor {
        height: 1fr;
    }

    #status-line {
        height: 1;
        background: $surface-darken-1;
        padding: 0 1;
    }
    """

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("f2", "toggle_navigator", "Toggle navigator"),
    ]

    def __init__(self, text: str, *, config: Optional[NavigatorConfig] = None) -> None:
        super().__init__()
        self._text = text
        self._config = config or NavigatorConfig.from_env()
        self.adapter: TextualNavigatorAdapter | None = None
        self._editor: NavigatorTextArea | None = None
        self._status: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._editor = NavigatorTextArea(self._text, id="editor")
        yield self._editor
        self._status = Static("", id="status-line")
        yield self._status
        yield Footer()

    def on_mount(self) -> None:
        assert self._editor is not None
        session = create_session(TextAreaHost(self._editor), config=self._config)
        hooks = TextualUIHooks(
            update_cursor=self._update_cursor,
            update_status=self._update_status,
            log=lambda line: telemetry.record_event(
                "adapter.trace", level="debug", data={"line": line}
            ),
        )
        self.adapter = TextualNavigatorAdapter(session, hooks)
        self._editor.adapter = self.adapter
        self._editor.focus()
        self.set_interval(0.1, self.adapter.process_timeouts)

    def action_toggle_navigator(self) -> None:
        if self.adapter is None:
            return
        session = self.adapter.session
        enabled = attached_feature(session) is None
        set_line_navigator(session, enabled, config=self._config)
        self._update_status("navigator on" if enabled else "navigator off")

    def _update_cursor(self, position: Position) -> None:
        if self._editor is not None:
            line, column = position
            self._editor.border_title = f"[{line + 1}:{column + 1}]"

    def _update_status(self, status: str) -> None:
        if self._status is not None:
            self._status.update(status)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the line navigator demo.")
    parser.add_argument("path", nargs="?", help="File to open (default: sample text)")
    parser.add_argument(
        "--disable",
        action="store_true",
        help="Start with the navigator switched off (toggle with F2)",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "quiet"),
        help="telelog preset to use instead of LINE_NAVIGATOR_* settings",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    text = Path(args.path).read_text(encoding="utf-8") if args.path else SAMPLE_TEXT
    config = NavigatorConfig.from_env()
    if args.disable:
        config = replace(config, enabled=False)
    LineNavigatorApp(text, config=config).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()

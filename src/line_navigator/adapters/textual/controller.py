"""Textual-facing controller that feeds key presses into an EditorSession."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable

from line_navigator.host import Position
from line_navigator.integration import attached_feature
from line_navigator.runtime import telemetry
from line_navigator.runtime.session import EditorSession, KeyInput, KeyResult


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the controller uses to update Textual widgets."""

    update_cursor: Callable[[Position], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional realtime log sink for debug lines
    log: Callable[[str], None] = _noop


def split_textual_key(key: str, modifiers: Iterable[str] = ()) -> KeyInput:
    """Turn Textual's ``"ctrl+left"`` style key names into a ``KeyInput``."""

    parts = key.split("+") if len(key) > 1 else [key]
    *inline, name = parts
    if not name:  # "ctrl++" and friends
        name = "+"
        inline = inline[:-1]
    merged = tuple(str(mod).lower() for mod in (*inline, *modifiers) if mod)
    return KeyInput(key=name, modifiers=merged)


class TextualNavigatorAdapter:
    """Bridges an ``EditorSession`` and its bus events to Textual widgets."""

    EVENTS = ("command.executed", "command.missing", "keys.timeout")

    def __init__(self, session: EditorSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        for event in self.EVENTS:
            session.bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )
        self._refresh_cursor()

    def handle_textual_key(
        self, key: str, *, modifiers: Iterable[str] = ()
    ) -> KeyResult:
        key_input = split_textual_key(key, modifiers)
        self._log_state("key ->", key=key_input.token)
        result = self.session.handle_key(key_input)
        self.hooks.update_status(describe_result(result))
        self._refresh_cursor()
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            command=result.command,
            timeout_ms=result.timeout_ms,
        )
        return result

    def run_command(self, name: str) -> KeyResult:
        result = self.session.execute(name)
        self.hooks.update_status(describe_result(result))
        self._refresh_cursor()
        return result

    def process_timeouts(self) -> bool:
        expired = self.session.process_timeouts()
        if expired:
            self.hooks.update_status("timeout")
        return expired

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _refresh_cursor(self) -> None:
        self.hooks.update_cursor(self.session.host.get_cursor())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        line = " ".join([prefix, *(f"{k}={v!r}" for k, v in snapshot.items())])
        try:
            self.hooks.log(line)
        except Exception as exc:  # sink failures are reported, never raised
            telemetry.record_event(
                "adapter.log_failed", level="warning", data={"error": str(exc)}
            )

    def _state_metadata(self) -> Dict[str, object]:
        host = self.session.host
        feature = attached_feature(self.session)
        return {
            "cursor": tuple(host.get_cursor()),
            "scroll_top": host.get_viewport_scroll().top,
            "pending": " ".join(self.session.pending_tokens) or None,
            "navigator": feature is not None,
        }


def describe_result(result: KeyResult) -> str:
    return result.command or result.status


__all__ = [
    "TextualNavigatorAdapter",
    "TextualUIHooks",
    "describe_result",
    "split_textual_key",
]

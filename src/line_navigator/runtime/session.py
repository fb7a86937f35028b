"""Editor session: host + keymaps + commands, driven by key input."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from line_navigator.commands import CommandTable, default_command_table
from line_navigator.host import EditorHost
from line_navigator.keymaps import (
    KeymapRegistry,
    KeymapResolver,
    KeyStroke,
    load_default_keymap,
)

from . import telemetry

LOGGER_NAME = "line_navigator.session"


@dataclass(slots=True)
class KeyInput:
    """Normalized key event handed to a session."""

    key: str
    modifiers: Tuple[str, ...] = ()

    @property
    def token(self) -> str:
        return KeyStroke(self.key, self.modifiers).token


@dataclass(slots=True)
class KeyResult:
    consumed: bool
    status: str = "ok"
    command: Optional[str] = None
    timeout_ms: Optional[int] = None


class EventBus:
    """Minimal publish/subscribe channel for session signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class EditorSession:
    """Dispatches key input through the keymap stack into named commands.

    ``extras`` is free-form per-session storage; integrations park their
    state there (the navigator feature lives under ``"line_navigator"``).
    """

    def __init__(
        self,
        host: EditorHost,
        *,
        registry: KeymapRegistry | None = None,
        commands: CommandTable | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.host = host
        self.registry = registry or KeymapRegistry(
            logger_name="line_navigator.keymaps"
        )
        if load_defaults and registry is None:
            load_default_keymap(self.registry)
        self.resolver = KeymapResolver(
            self.registry, logger_name="line_navigator.keymaps"
        )
        self.commands = commands if commands is not None else default_command_table()
        self.bus = EventBus()
        self.extras: Dict[str, Any] = {}
        self._pending: List[str] = []
        self._deadline: Optional[float] = None

    @property
    def pending_tokens(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def execute(self, name: str) -> KeyResult:
        if name not in self.commands:
            self.bus.emit("command.missing", name)
            telemetry.record_event(
                "command.missing",
                level="warning",
                data={"command": name},
                logger_name=LOGGER_NAME,
            )
            return KeyResult(consumed=False, status="missing_command", command=name)
        self.commands.execute(name, self.host)
        self.bus.emit(
            "command.executed", {"command": name, "cursor": self.host.get_cursor()}
        )
        return KeyResult(consumed=True, status="executed", command=name)

    def handle_key(self, key: KeyInput) -> KeyResult:
        self._expire_pending()
        self._pending.append(key.token)
        with telemetry.span(
            "session::handle_key",
            logger_name=LOGGER_NAME,
            component="session",
            metadata={"key": key.token, "pending": len(self._pending) - 1},
        ):
            result = self.resolver.resolve(self._pending)

            if result.status == "match" and result.binding is not None:
                self._clear_pending()
                return self.execute(result.binding.command)

            if result.status == "pending":
                timeout_ms = result.timeout_ms or 1000
                self._deadline = time.monotonic() + timeout_ms / 1000.0
                return KeyResult(consumed=True, status="pending", timeout_ms=timeout_ms)

            self._clear_pending()
            return KeyResult(consumed=False, status="unbound")

    def process_timeouts(self) -> bool:
        """Drop a pending sequence whose deadline passed; True if one was dropped."""

        return self._expire_pending()

    def cancel_pending(self) -> None:
        self._clear_pending()

    def _expire_pending(self) -> bool:
        if self._deadline is None or time.monotonic() < self._deadline:
            return False
        self.bus.emit("keys.timeout", tuple(self._pending))
        self._clear_pending()
        return True

    def _clear_pending(self) -> None:
        self._pending.clear()
        self._deadline = None


__all__ = ["EditorSession", "EventBus", "KeyInput", "KeyResult"]

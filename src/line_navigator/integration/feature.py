"""Opt-in wiring of the navigator into an editor session."""

from __future__ import annotations

from functools import partial
from typing import Dict, Optional

from line_navigator.commands import Command, CommandOverrides
from line_navigator.config import NavigatorConfig
from line_navigator.host import EditorHost
from line_navigator.keymaps import Binding, KeySequence
from line_navigator.navigation import (
    navigate_left,
    navigate_right,
    scroll_line_down,
    scroll_line_up,
)
from line_navigator.runtime import telemetry
from line_navigator.runtime.session import EditorSession

FEATURE_KEY = "line_navigator"
KEYMAP_NAME = "line_navigator"

WORD_LEFT_COMMANDS = ("go_word_left", "go_word_boundary_left")
WORD_RIGHT_COMMANDS = ("go_word_right", "go_word_boundary_right")


class LineNavigatorFeature:
    """Per-session navigator instance.

    ``register`` pushes the ``line_navigator`` keymap and overrides the word
    motion commands; ``unregister`` pops the keymap and restores every
    overridden command exactly as it was.
    """

    def __init__(
        self, session: EditorSession, config: Optional[NavigatorConfig] = None
    ) -> None:
        self.session = session
        self.config = config or NavigatorConfig()
        self._overrides = CommandOverrides(self._commands())

    @property
    def registered(self) -> bool:
        return self._overrides.installed

    def _commands(self) -> Dict[str, Command]:
        config = self.config
        commands = [
            Command(
                "scroll_line_up",
                partial(scroll_line_up, config=config),
                "Scroll the viewport up one line",
            ),
            Command(
                "scroll_line_down",
                partial(scroll_line_down, config=config),
                "Scroll the viewport down one line",
            ),
        ]
        if config.override_word_commands:
            left = partial(navigate_left, config=config)
            right = partial(navigate_right, config=config)
            commands.extend(
                Command(name, left, "Move left to the previous run boundary")
                for name in WORD_LEFT_COMMANDS
            )
            commands.extend(
                Command(name, right, "Move right to the next run boundary")
                for name in WORD_RIGHT_COMMANDS
            )
        return {command.name: command for command in commands}

    def bindings(self) -> tuple[Binding, ...]:
        return tuple(
            Binding(
                id=f"{KEYMAP_NAME}.{command}",
                keymap=KEYMAP_NAME,
                sequence=KeySequence.from_chords(chord),
                command=command,
            )
            for command, chord in self.config.key_bindings.items()
        )

    def register(self) -> None:
        if self.registered:
            return
        with telemetry.span(
            "integration::register",
            component="integration",
            metadata={"commands": ",".join(self._overrides.names())},
        ):
            self._overrides.install(self.session.commands)
            try:
                self.session.registry.add_keymap(KEYMAP_NAME, self.bindings())
            except Exception:
                self._overrides.uninstall()
                raise

    def unregister(self) -> None:
        if not self.registered:
            return
        with telemetry.span("integration::unregister", component="integration"):
            self.session.registry.remove_keymap(KEYMAP_NAME)
            self._overrides.uninstall()


def attached_feature(session: EditorSession) -> Optional[LineNavigatorFeature]:
    feature = session.extras.get(FEATURE_KEY)
    return feature if isinstance(feature, LineNavigatorFeature) else None


def set_line_navigator(
    session: EditorSession,
    enabled: bool,
    *,
    config: Optional[NavigatorConfig] = None,
) -> Optional[LineNavigatorFeature]:
    """Option handler: attach/register or unregister/detach the feature."""

    feature = attached_feature(session)
    if enabled and feature is None:
        feature = LineNavigatorFeature(session, config)
        feature.register()
        session.extras[FEATURE_KEY] = feature
    elif not enabled and feature is not None:
        feature.unregister()
        del session.extras[FEATURE_KEY]
        feature = None
    telemetry.record_event(
        "integration.option", level="debug", data={"enabled": enabled}
    )
    return feature


def create_session(
    host: EditorHost, *, config: Optional[NavigatorConfig] = None
) -> EditorSession:
    """Session with default keymap/commands and the navigator per ``config``."""

    config = config or NavigatorConfig.from_env()
    session = EditorSession(host)
    set_line_navigator(session, config.enabled, config=config)
    return session


__all__ = [
    "FEATURE_KEY",
    "KEYMAP_NAME",
    "LineNavigatorFeature",
    "attached_feature",
    "create_session",
    "set_line_navigator",
]

from __future__ import annotations

import pytest

from line_navigator.buffer import Buffer, Viewport
from line_navigator.config import NavigatorConfig
from line_navigator.host import Position
from line_navigator.integration import (
    FEATURE_KEY,
    KEYMAP_NAME,
    LineNavigatorFeature,
    attached_feature,
    create_session,
    set_line_navigator,
)
from line_navigator.keymaps import DEFAULT_KEYMAP
from line_navigator.runtime.session import EditorSession, KeyInput


def make_session(
    text: str = "  foo.bar", cursor: tuple[int, int] = (0, 0)
) -> EditorSession:
    viewport = Viewport(client_height=160.0, line_height=16.0)
    return EditorSession(Buffer.from_text(text, cursor=cursor, viewport=viewport))


def make_long_session(cursor: tuple[int, int] = (2, 0)) -> EditorSession:
    text = "\n".join(f"line {index}" for index in range(60))
    session = make_session(text, cursor)
    session.host.set_viewport_scroll(64.0)
    return session


def press(session: EditorSession, key: str, *modifiers: str) -> None:
    session.handle_key(KeyInput(key, tuple(modifiers)))


def test_enabling_pushes_keymap_and_overrides_word_commands() -> None:
    session = make_session()
    builtin = session.commands["go_word_right"]

    feature = set_line_navigator(session, True)

    assert isinstance(feature, LineNavigatorFeature)
    assert feature.registered
    assert attached_feature(session) is feature
    assert session.registry.keymaps() == (KEYMAP_NAME, DEFAULT_KEYMAP)
    assert session.commands["go_word_right"] is not builtin
    assert "scroll_line_up" in session.commands
    assert "scroll_line_down" in session.commands


def test_word_keys_use_run_boundaries_once_enabled() -> None:
    plain = make_session()
    press(plain, "right", "ctrl")
    assert plain.host.get_cursor() == Position(0, 5)

    session = make_session()
    set_line_navigator(session, True)
    press(session, "right", "ctrl")
    assert session.host.get_cursor() == Position(0, 2)

    press(session, "right", "alt")
    assert session.host.get_cursor() == Position(0, 5)

    press(session, "left", "ctrl")
    assert session.host.get_cursor() == Position(0, 2)


def test_scroll_keys_are_bound() -> None:
    session = make_long_session()
    set_line_navigator(session, True)

    press(session, "down", "ctrl")
    assert session.host.get_viewport_scroll().top == 80.0
    assert session.host.get_cursor() == Position(5, 0)

    press(session, "up", "ctrl")
    assert session.host.get_viewport_scroll().top == 64.0


def test_disabling_restores_previous_commands_and_keys() -> None:
    session = make_long_session()
    before = {name: session.commands[name] for name in session.commands}
    set_line_navigator(session, True)

    assert set_line_navigator(session, False) is None

    assert FEATURE_KEY not in session.extras
    assert session.registry.keymaps() == (DEFAULT_KEYMAP,)
    assert {name: session.commands[name] for name in session.commands} == before
    press(session, "down", "ctrl")
    assert session.host.get_viewport_scroll().top == 64.0


def test_enabling_twice_keeps_one_feature() -> None:
    session = make_session()

    first = set_line_navigator(session, True)
    second = set_line_navigator(session, True)

    assert first is second
    assert session.registry.keymaps().count(KEYMAP_NAME) == 1


def test_disabling_when_never_enabled_is_harmless() -> None:
    session = make_session()

    assert set_line_navigator(session, False) is None
    assert session.registry.keymaps() == (DEFAULT_KEYMAP,)


def test_word_overrides_can_be_turned_off() -> None:
    session = make_session()
    builtin = session.commands["go_word_right"]

    set_line_navigator(
        session, True, config=NavigatorConfig(override_word_commands=False)
    )

    assert session.commands["go_word_right"] is builtin
    assert "scroll_line_down" in session.commands


def test_custom_key_bindings() -> None:
    session = make_long_session()
    config = NavigatorConfig().with_bindings(scroll_line_down="alt+j")

    feature = set_line_navigator(session, True, config=config)

    assert {b.key_signature for b in feature.bindings()} == {"alt+j", "ctrl+up"}
    press(session, "j", "alt")
    assert session.host.get_viewport_scroll().top == 80.0


def test_register_failure_rolls_back_overrides() -> None:
    session = make_session()
    builtin = session.commands["go_word_left"]
    session.registry.add_keymap(KEYMAP_NAME)
    feature = LineNavigatorFeature(session)

    with pytest.raises(ValueError):
        feature.register()

    assert not feature.registered
    assert session.commands["go_word_left"] is builtin
    assert "scroll_line_up" not in session.commands


def test_create_session_respects_enabled_flag() -> None:
    host = Buffer.from_text("text")

    enabled = create_session(host, config=NavigatorConfig())
    disabled = create_session(host, config=NavigatorConfig(enabled=False))

    assert attached_feature(enabled) is not None
    assert attached_feature(disabled) is None


def test_create_session_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("LINE_NAVIGATOR_ENABLED", "0")

    session = create_session(Buffer.from_text("text"))

    assert attached_feature(session) is None

from __future__ import annotations

from typing import List

from line_navigator.buffer import Buffer
from line_navigator.host import Position
from line_navigator.keymaps import Binding, KeySequence
from line_navigator.runtime import session as session_module
from line_navigator.runtime.session import EditorSession, KeyInput


def make_session(
    text: str = "foo bar", cursor: tuple[int, int] = (0, 0)
) -> EditorSession:
    return EditorSession(Buffer.from_text(text, cursor=cursor))


def add_custom_keymap(session: EditorSession, *bindings: Binding) -> None:
    session.registry.add_keymap("custom", bindings)


def make_binding(binding_id: str, chords: tuple[str, ...], command: str) -> Binding:
    return Binding(
        id=binding_id,
        keymap="custom",
        sequence=KeySequence.from_chords(*chords, timeout_ms=500),
        command=command,
    )


def test_key_input_token_normalizes_modifiers() -> None:
    assert KeyInput("Left", ("Control",)).token == "ctrl+left"


def test_handle_key_runs_default_bindings() -> None:
    session = make_session()

    result = session.handle_key(KeyInput("right"))
    assert result.consumed
    assert result.command == "go_char_right"
    assert session.host.get_cursor() == Position(0, 1)

    session.handle_key(KeyInput("right", ("ctrl",)))
    assert session.host.get_cursor() == Position(0, 3)


def test_unbound_key_is_not_consumed() -> None:
    session = make_session()

    result = session.handle_key(KeyInput("z", ("ctrl",)))

    assert not result.consumed
    assert result.status == "unbound"


def test_missing_command_is_reported_on_bus() -> None:
    session = make_session()
    missing: List[object] = []
    session.bus.subscribe("command.missing", missing.append)
    add_custom_keymap(session, make_binding("custom.ghost", ("f5",), "ghost"))

    result = session.handle_key(KeyInput("f5"))

    assert result.status == "missing_command"
    assert missing == ["ghost"]


def test_executed_commands_are_published() -> None:
    session = make_session()
    events: List[object] = []
    session.bus.subscribe("command.executed", events.append)

    session.execute("go_char_right")

    assert events == [{"command": "go_char_right", "cursor": Position(0, 1)}]


def test_multi_key_sequence_waits_for_completion() -> None:
    session = make_session()
    add_custom_keymap(session, make_binding("custom.gg", ("g", "g"), "go_word_right"))

    first = session.handle_key(KeyInput("g"))
    assert first.status == "pending"
    assert first.timeout_ms == 500
    assert session.pending_tokens == ("g",)

    second = session.handle_key(KeyInput("g"))
    assert second.command == "go_word_right"
    assert session.pending_tokens == ()
    assert session.host.get_cursor() == Position(0, 3)


def test_pending_sequence_times_out(monkeypatch) -> None:
    session = make_session()
    add_custom_keymap(session, make_binding("custom.gg", ("g", "g"), "go_word_right"))
    timeouts: List[object] = []
    session.bus.subscribe("keys.timeout", timeouts.append)
    clock = {"now": 100.0}
    monkeypatch.setattr(session_module.time, "monotonic", lambda: clock["now"])

    session.handle_key(KeyInput("g"))
    assert not session.process_timeouts()

    clock["now"] += 1.0
    assert session.process_timeouts()
    assert session.pending_tokens == ()
    assert timeouts == [("g",)]


def test_cancel_pending() -> None:
    session = make_session()
    add_custom_keymap(session, make_binding("custom.gg", ("g", "g"), "go_word_right"))

    session.handle_key(KeyInput("g"))
    session.cancel_pending()

    assert session.pending_tokens == ()
    assert session.handle_key(KeyInput("g")).status == "pending"

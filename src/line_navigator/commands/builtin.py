"""Conventional motions a plain host ships before the navigator is enabled."""

from __future__ import annotations

from typing import Callable

from line_navigator.host import Direction, EditorHost
from line_navigator.navigation.classifier import is_word_char, sample_at

from .table import Command, CommandTable


def go_char_left(editor: EditorHost) -> None:
    editor.move_cursor_one_character(Direction.LEFT)


def go_char_right(editor: EditorHost) -> None:
    editor.move_cursor_one_character(Direction.RIGHT)


def _peek(editor: EditorHost, direction: Direction) -> str:
    line, column = editor.get_cursor()
    text = editor.get_line_text(line)
    if direction is Direction.LEFT:
        return sample_at(text, column - 1) if column > 0 else "\n"
    return sample_at(text, column) or "\n"


def _advance_while(
    editor: EditorHost, direction: Direction, keep_going: Callable[[str], bool]
) -> bool:
    """Step while the next character satisfies ``keep_going``.

    Returns False once the host refuses to move (buffer edge).
    """

    while keep_going(_peek(editor, direction)):
        before = editor.get_cursor()
        editor.move_cursor_one_character(direction)
        if editor.get_cursor() == before:
            return False
    return True


def _word_motion(editor: EditorHost, direction: Direction) -> None:
    if _advance_while(editor, direction, lambda ch: not is_word_char(ch)):
        _advance_while(editor, direction, is_word_char)


def _group_motion(editor: EditorHost, direction: Direction) -> None:
    in_word = is_word_char(_peek(editor, direction))
    _advance_while(editor, direction, lambda ch: is_word_char(ch) == in_word)


def go_word_left(editor: EditorHost) -> None:
    _word_motion(editor, Direction.LEFT)


def go_word_right(editor: EditorHost) -> None:
    _word_motion(editor, Direction.RIGHT)


def go_word_boundary_left(editor: EditorHost) -> None:
    _group_motion(editor, Direction.LEFT)


def go_word_boundary_right(editor: EditorHost) -> None:
    _group_motion(editor, Direction.RIGHT)


BUILTIN_COMMANDS: tuple[Command, ...] = (
    Command("go_char_left", go_char_left, "Move one character left"),
    Command("go_char_right", go_char_right, "Move one character right"),
    Command("go_word_left", go_word_left, "Move to the start of the previous word"),
    Command("go_word_right", go_word_right, "Move to the end of the next word"),
    Command(
        "go_word_boundary_left",
        go_word_boundary_left,
        "Move left across one word/non-word group",
    ),
    Command(
        "go_word_boundary_right",
        go_word_boundary_right,
        "Move right across one word/non-word group",
    ),
)


def default_command_table() -> CommandTable:
    table = CommandTable()
    for command in BUILTIN_COMMANDS:
        table.register(command)
    return table


__all__ = [
    "BUILTIN_COMMANDS",
    "default_command_table",
    "go_char_left",
    "go_char_right",
    "go_word_boundary_left",
    "go_word_boundary_right",
    "go_word_left",
    "go_word_right",
]

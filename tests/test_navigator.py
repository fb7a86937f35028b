from __future__ import annotations

from typing import List

import pytest

from line_navigator.buffer import Buffer
from line_navigator.config import NavigatorConfig
from line_navigator.host import Direction, Position, ScrollInfo
from line_navigator.navigation import (
    classify,
    navigate_left,
    navigate_right,
    remaining_positions,
    sample_at,
)


def make_buffer(text: str, cursor: tuple[int, int] = (0, 0)) -> Buffer:
    return Buffer.from_text(text, cursor=cursor)


def class_at(buffer: Buffer, position: Position):
    return classify(sample_at(buffer.get_line_text(position.line), position.column))


class StuckHost:
    """Host whose single-character move never changes the cursor."""

    def __init__(self, lines: List[str], cursor: Position) -> None:
        self.lines = lines
        self.cursor = cursor
        self.moves = 0

    def get_cursor(self) -> Position:
        return self.cursor

    def set_cursor(self, position: Position) -> None:
        self.cursor = position

    def get_line_text(self, line: int) -> str:
        return self.lines[line]

    def line_count(self) -> int:
        return len(self.lines)

    def move_cursor_one_character(self, direction: Direction) -> None:
        self.moves += 1

    def get_viewport_scroll(self) -> ScrollInfo:
        return ScrollInfo(0.0, 100.0)

    def set_viewport_scroll(self, top: float) -> None:
        return None

    def get_line_height(self, line: int) -> float:
        return 10.0


@pytest.mark.parametrize(
    ("start", "expected"),
    [
        ((0, 0), (0, 3)),
        ((0, 3), (0, 4)),
        ((0, 4), (0, 9)),
        ((0, 9), (0, 12)),
    ],
)
def test_navigate_right_stops_at_each_run(start, expected) -> None:
    buffer = make_buffer("foo.bar  baz", start)

    navigate_right(buffer)

    assert buffer.get_cursor() == Position(*expected)


def test_navigate_right_at_buffer_end_stays_put() -> None:
    buffer = make_buffer("foo", (0, 3))

    navigate_right(buffer)

    assert buffer.get_cursor() == Position(0, 3)


def test_navigate_right_skips_leading_whitespace() -> None:
    buffer = make_buffer("   foo")

    navigate_right(buffer)

    assert buffer.get_cursor() == Position(0, 3)


def test_navigate_right_crosses_delimiter_run() -> None:
    buffer = make_buffer("((foo")

    navigate_right(buffer)

    assert buffer.get_cursor() == Position(0, 2)


def test_navigate_right_whitespace_then_delimiter() -> None:
    buffer = make_buffer("foo  (bar")

    navigate_right(buffer)

    assert buffer.get_cursor() == Position(0, 5)


def test_navigate_right_from_line_end_lands_on_next_line() -> None:
    buffer = make_buffer("foo\nbar", (0, 3))

    navigate_right(buffer)

    assert buffer.get_cursor() == Position(1, 0)


def test_navigate_right_from_blank_line_lands_on_first_char() -> None:
    buffer = make_buffer("foo\n\nbar", (1, 0))

    navigate_right(buffer)

    assert buffer.get_cursor() == Position(2, 0)


def test_navigate_right_word_run_can_continue_across_blank_line() -> None:
    buffer = make_buffer("foo\n\nbar", (1, 0))
    config = NavigatorConfig(empty_ends_word_run=False)

    navigate_right(buffer, config=config)

    assert buffer.get_cursor() == Position(2, 3)


def test_navigate_right_makes_progress_until_buffer_end() -> None:
    buffer = make_buffer("int x = (a+b);\n\n  return x;")
    visited = [buffer.get_cursor()]

    for _ in range(50):
        navigate_right(buffer)
        if buffer.get_cursor() == visited[-1]:
            break
        visited.append(buffer.get_cursor())

    assert visited == sorted(visited)
    assert visited[-1] == Position(2, 11)


@pytest.mark.parametrize(
    ("start", "expected"),
    [
        ((0, 12), (0, 9)),
        ((0, 9), (0, 4)),
        ((0, 4), (0, 3)),
        ((0, 3), (0, 0)),
    ],
)
def test_navigate_left_stops_after_each_boundary(start, expected) -> None:
    buffer = make_buffer("foo.bar  baz", start)

    navigate_left(buffer)

    assert buffer.get_cursor() == Position(*expected)


def test_navigate_left_at_buffer_start_stays_put() -> None:
    buffer = make_buffer("foo")

    navigate_left(buffer)

    assert buffer.get_cursor() == Position(0, 0)


def test_navigate_left_is_transparent_to_blank_lines() -> None:
    buffer = make_buffer("foo\n\n\nbar", (3, 0))

    navigate_left(buffer)

    assert buffer.get_cursor() == Position(0, 0)


def test_navigate_left_stops_after_delimiter() -> None:
    buffer = make_buffer("a.b", (0, 3))

    navigate_left(buffer)

    assert buffer.get_cursor() == Position(0, 2)


@pytest.mark.parametrize("start", [(0, 0), (0, 4), (0, 9)])
def test_left_undoes_right_to_same_class(start) -> None:
    buffer = make_buffer("foo.bar  baz", start)
    origin = Position(*start)
    expected = class_at(buffer, origin)

    navigate_right(buffer)
    navigate_left(buffer)

    assert class_at(buffer, buffer.get_cursor()) is expected


def test_max_scan_steps_caps_forward_scan() -> None:
    buffer = make_buffer("aaaaaaaaaa")

    navigate_right(buffer, config=NavigatorConfig(max_scan_steps=3))

    assert buffer.get_cursor() == Position(0, 3)


def test_max_scan_steps_caps_backward_scan() -> None:
    buffer = make_buffer("aaaaaaaaaa", (0, 10))

    navigate_left(buffer, config=NavigatorConfig(max_scan_steps=4))

    assert buffer.get_cursor() == Position(0, 6)


def test_scans_terminate_when_host_refuses_to_move() -> None:
    host = StuckHost(["    "], Position(0, 2))

    navigate_right(host)
    navigate_left(host)

    assert host.get_cursor() == Position(0, 2)
    assert host.moves == 2


def test_remaining_positions_counts_line_end_slots() -> None:
    buffer = make_buffer("ab\ncd")

    assert remaining_positions(buffer, Position(0, 1), Direction.RIGHT) == 4
    assert remaining_positions(buffer, Position(1, 1), Direction.LEFT) == 4
    assert remaining_positions(buffer, Position(1, 2), Direction.RIGHT) == 0
    assert remaining_positions(buffer, Position(0, 0), Direction.LEFT) == 0

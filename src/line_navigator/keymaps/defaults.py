"""Built-in keymap seeding a session with conventional cursor keys."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from .models import Binding, KeySequence
from .registry import KeymapRegistry

DEFAULT_KEYMAP = "default"

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding(
        id="default.char_left",
        keymap=DEFAULT_KEYMAP,
        sequence=KeySequence.from_chords("left"),
        command="go_char_left",
        description="Move one character left",
    ),
    Binding(
        id="default.char_right",
        keymap=DEFAULT_KEYMAP,
        sequence=KeySequence.from_chords("right"),
        command="go_char_right",
        description="Move one character right",
    ),
    Binding(
        id="default.word_left",
        keymap=DEFAULT_KEYMAP,
        sequence=KeySequence.from_chords("ctrl+left"),
        command="go_word_left",
        description="Move one word left",
    ),
    Binding(
        id="default.word_right",
        keymap=DEFAULT_KEYMAP,
        sequence=KeySequence.from_chords("ctrl+right"),
        command="go_word_right",
        description="Move one word right",
    ),
    Binding(
        id="default.word_boundary_left",
        keymap=DEFAULT_KEYMAP,
        sequence=KeySequence.from_chords("alt+left"),
        command="go_word_boundary_left",
        description="Move one word group left",
    ),
    Binding(
        id="default.word_boundary_right",
        keymap=DEFAULT_KEYMAP,
        sequence=KeySequence.from_chords("alt+right"),
        command="go_word_boundary_right",
        description="Move one word group right",
    ),
)


def load_default_keymap(
    registry: KeymapRegistry,
    *,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    sequence_timeout_ms: int | None = None,
) -> None:
    """Add the ``default`` keymap (at the bottom of a fresh registry)."""

    excluded = set(exclude_bindings or ())
    bindings = [
        _with_timeout(binding, sequence_timeout_ms)
        for binding in (*DEFAULT_BINDINGS, *(extra_bindings or ()))
        if binding.id not in excluded
    ]
    registry.add_keymap(DEFAULT_KEYMAP, bindings)


def _with_timeout(binding: Binding, timeout_ms: int | None) -> Binding:
    if timeout_ms is None:
        return binding
    sequence = KeySequence(binding.sequence.strokes, timeout_ms=timeout_ms)
    return replace(binding, sequence=sequence)


__all__ = ["DEFAULT_BINDINGS", "DEFAULT_KEYMAP", "load_default_keymap"]

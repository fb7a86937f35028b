"""Dataclasses describing key chords and keymap bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

MODIFIER_ALIASES = {
    "control": "ctrl",
    "ctl": "ctrl",
    "cmd": "meta",
    "option": "alt",
}


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = []
    for modifier in modifiers:
        cleaned = modifier.strip().lower()
        if cleaned:
            values.append(MODIFIER_ALIASES.get(cleaned, cleaned))
    return tuple(sorted(dict.fromkeys(values)))


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press (``ctrl+down`` and the like)."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "key", self.key.lower() if len(self.key) > 1 else self.key)
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @classmethod
    def parse(cls, chord: str) -> "KeyStroke":
        """Parse ``"ctrl+down"`` / ``"Ctrl-Down"`` style chords."""

        text = chord.strip()
        if not text:
            raise ValueError("chord cannot be empty")
        separator = "+" if "+" in text[:-1] else "-"
        parts = text.split(separator) if len(text) > 1 else [text]
        *modifiers, key = parts
        if not key:
            raise ValueError(f"chord '{chord}' has no key")
        return cls(key=key, modifiers=tuple(modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            return "+".join(self.modifiers + (self.key,))
        return self.key


@dataclass(frozen=True, slots=True)
class KeySequence:
    """Immutable run of keystrokes bound as one unit."""

    strokes: tuple[KeyStroke, ...]
    timeout_ms: int = 1000

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("KeySequence requires at least one stroke")
        if self.timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)

    @classmethod
    def from_chords(cls, *chords: str, timeout_ms: int = 1000) -> "KeySequence":
        strokes = tuple(KeyStroke.parse(chord) for chord in chords if chord)
        return cls(strokes=strokes, timeout_ms=timeout_ms)


@dataclass(frozen=True, slots=True)
class Binding:
    """Ties a key sequence in a named keymap to a command name."""

    id: str
    keymap: str
    sequence: KeySequence
    command: str
    description: str = ""
    priority: int = 0

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.keymap:
            raise ValueError("binding keymap cannot be empty")
        if not self.command:
            raise ValueError("binding command cannot be empty")

    @property
    def key_signature(self) -> str:
        return " ".join(self.sequence.tokens)


__all__ = ["Binding", "KeySequence", "KeyStroke"]

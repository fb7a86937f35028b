"""Per-call accumulator for character-class observations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from .classifier import CharClass, classify


@dataclass(slots=True)
class ScanState:
    """Counts how often each class has been seen during one scan."""

    counts: Dict[CharClass, int] = field(
        default_factory=lambda: {char_class: 0 for char_class in CharClass}
    )
    steps: int = 0

    def observe(self, sample: str) -> CharClass:
        char_class = classify(sample)
        self.counts[char_class] += 1
        self.steps += 1
        return char_class

    def seen(self, *classes: CharClass) -> bool:
        return any(self.counts[char_class] > 0 for char_class in classes)

    def count(self, char_class: CharClass) -> int:
        return self.counts[char_class]


__all__ = ["ScanState"]

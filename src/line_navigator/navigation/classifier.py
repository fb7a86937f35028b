"""Character classes that drive run-boundary detection."""

from __future__ import annotations

from enum import Enum

DELIMITERS = frozenset(".:;(){}/\"',+-*&%=<>!?|~^")

# Ideographic / kana blocks that have no case but still form words.
SINGLE_CASE_WORD_RANGES = (
    (0x3040, 0x309F),
    (0x30A0, 0x30FF),
    (0x3400, 0x4DB5),
    (0x4E00, 0x9FCC),
)


class CharClass(str, Enum):
    EMPTY = "empty"
    WHITESPACE = "whitespace"
    DELIMITER = "delimiter"
    WORD_CHAR = "word_char"


def sample_at(text: str, column: int) -> str:
    """Character under ``column``, or ``""`` at/after the end of ``text``."""

    if 0 <= column < len(text):
        return text[column]
    return ""


def is_empty(sample: str) -> bool:
    return len(sample) == 0


def is_whitespace(sample: str) -> bool:
    return sample.isspace()


def is_delimiter(sample: str) -> bool:
    return sample in DELIMITERS


def is_word_char(sample: str) -> bool:
    if sample.isascii():
        return sample == "_" or sample.isalnum()
    code_point = ord(sample[0])
    if code_point <= 0x80:
        return False
    if sample.upper() != sample.lower():
        return True
    return any(low <= code_point <= high for low, high in SINGLE_CASE_WORD_RANGES)


_PREDICATES = (
    (CharClass.EMPTY, is_empty),
    (CharClass.WHITESPACE, is_whitespace),
    (CharClass.DELIMITER, is_delimiter),
    (CharClass.WORD_CHAR, is_word_char),
)


def classify(sample: str) -> CharClass:
    """Map one character sample to its class.

    Predicates are tried in a fixed order; anything none of them claims
    (``@``, ``#``, ``[`` and friends) is treated as a delimiter.
    """

    for char_class, predicate in _PREDICATES:
        if predicate(sample):
            return char_class
    return CharClass.DELIMITER


__all__ = [
    "CharClass",
    "DELIMITERS",
    "classify",
    "is_delimiter",
    "is_empty",
    "is_whitespace",
    "is_word_char",
    "sample_at",
]

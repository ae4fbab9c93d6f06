"""Shared enums and type aliases used across the matching engines."""
from __future__ import annotations

from enum import Enum, auto
from typing import TypeAlias

# Text and pattern are compared one code unit at a time: a character of a
# str, or an int of a bytes object.
Text: TypeAlias = str | bytes
Pattern: TypeAlias = str | bytes
Symbol: TypeAlias = str | int


class Algorithm(Enum):
    KMP = "kmp"
    BOYER_MOORE = "bm"

    @classmethod
    def parse(cls, value: Algorithm | str) -> Algorithm:
        """Accept an Algorithm or its short name ("kmp", "bm")."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            names = ", ".join(repr(a.value) for a in cls)
            raise ValueError(
                f"Unknown algorithm {value!r}, expected one of {names}"
            ) from None

    @property
    def label(self) -> str:
        return "KMP" if self is Algorithm.KMP else "BM"


class Outcome(Enum):
    MATCH = auto()
    MISMATCH = auto()
    FINISHED = auto()   # the step that flipped the session to finished
    IDLE = auto()       # any step taken after that

    def is_comparison(self) -> bool:
        """True when the step compared two characters."""
        return self in (Outcome.MATCH, Outcome.MISMATCH)

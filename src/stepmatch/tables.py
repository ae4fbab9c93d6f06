"""Precomputed tables for KMP and Boyer-Moore.

Two tables, both built in a single pass over the pattern:

    1. LPS (failure function) for KMP: lps[i] is the length of the
       longest proper prefix of pattern[:i+1] that is also a suffix
       of it. On a mismatch after j matched characters, KMP resumes
       at j = lps[j-1] instead of re-reading text it has already seen.
    2. Bad-character table for Boyer-Moore: for every character c of
       the pattern, the distance from its rightmost occurrence k to
       the end of the pattern (m - 1 - k). Characters that do not
       occur in the pattern look up as m.

The LPS construction is where the linear-time guarantee lives: the
only thing that ever rewinds is `length`, following the table it is
building. Resetting `length` to 0 and rescanning would still produce
the right table, in O(m^2).
"""
from __future__ import annotations

from collections.abc import Iterator, Mapping

from stepmatch.types import Algorithm, Pattern, Symbol

BYTE_ALPHABET = 256


class InvalidPattern(ValueError):
    """Raised when a table or session is requested for an empty pattern."""

    def __init__(self, pattern: Pattern) -> None:
        self.pattern = pattern
        super().__init__("Pattern must contain at least one character")


def validate_pattern(pattern: Pattern) -> None:
    if not isinstance(pattern, (str, bytes)):
        raise TypeError(
            f"Pattern must be str or bytes, got {type(pattern).__name__}"
        )
    if len(pattern) == 0:
        raise InvalidPattern(pattern)


def build_lps(pattern: Pattern) -> list[int]:
    """Build the KMP failure table for `pattern`.

    >>> build_lps("ababaca")
    [0, 0, 1, 2, 3, 0, 1]
    """
    validate_pattern(pattern)
    m = len(pattern)
    lps = [0] * m
    length = 0
    i = 1
    while i < m:
        if pattern[i] == pattern[length]:
            length += 1
            lps[i] = length
            i += 1
        elif length != 0:
            # fall back along the table, i stays put
            length = lps[length - 1]
        else:
            lps[i] = 0
            i += 1
    return lps


class BadCharTable(Mapping):
    """Read-only mapping: pattern character -> m - 1 - (rightmost index).

    Only characters that occur in the pattern are keys. lookup()
    is the shift-computation entry point and returns m for anything
    else, so callers never see a KeyError mid-search.

    bytes patterns have a bounded alphabet, so their offsets live in a
    fixed 256-slot list indexed by byte value. str patterns use a dict.
    """

    __slots__ = ("_m", "_offsets", "_dense")

    def __init__(self, pattern: Pattern) -> None:
        validate_pattern(pattern)
        m = len(pattern)
        self._m = m
        self._offsets: dict[Symbol, int] = {}
        self._dense: list[int] | None = (
            [m] * BYTE_ALPHABET if isinstance(pattern, bytes) else None
        )
        # Left to right so later occurrences overwrite earlier ones.
        for i, ch in enumerate(pattern):
            self._offsets[ch] = m - 1 - i
            if self._dense is not None:
                self._dense[ch] = m - 1 - i

    @property
    def pattern_length(self) -> int:
        return self._m

    def lookup(self, ch: Symbol) -> int:
        """Offset for `ch`, or the pattern length when `ch` is absent."""
        if self._dense is not None and isinstance(ch, int):
            return self._dense[ch] if 0 <= ch < BYTE_ALPHABET else self._m
        return self._offsets.get(ch, self._m)

    def last_occurrence(self, ch: Symbol) -> int:
        """Rightmost index of `ch` in the pattern, -1 when absent."""
        return self._m - 1 - self.lookup(ch)

    def __getitem__(self, ch: Symbol) -> int:
        return self._offsets[ch]

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._offsets)

    def __len__(self) -> int:
        return len(self._offsets)

    def __repr__(self) -> str:
        return f"BadCharTable({self._offsets!r}, m={self._m})"


def build_bad_char(pattern: Pattern) -> BadCharTable:
    """Build the Boyer-Moore bad-character table for `pattern`."""
    return BadCharTable(pattern)


def build_table(
    pattern: Pattern, algorithm: Algorithm | str
) -> list[int] | BadCharTable:
    """Build the table the given algorithm searches with."""
    algorithm = Algorithm.parse(algorithm)
    if algorithm is Algorithm.KMP:
        return build_lps(pattern)
    return build_bad_char(pattern)

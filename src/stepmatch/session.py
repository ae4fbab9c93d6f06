"""Steppable KMP and Boyer-Moore search sessions.

A search is a sequence of immutable states. Each transition function
takes one state and returns the next state plus a StepReport, making
exactly one character comparison (or, at the very end, flipping the
state to finished). Nothing is shared between states; found is a
tuple that only ever grows.

    KMP:  cursors i (text) and j (pattern) move left to right. A full
          match records i - m and resumes at j = lps[m-1], which keeps
          overlapping matches. A mismatch with j > 0 falls back to
          j = lps[j-1] without moving i.

    BM:   s is the alignment (pattern start in the text) and j walks the
          pattern right to left from m - 1. Shifts come from the
          bad-character table, always at least 1.

MatchSession owns the current state for a driver that wants the
familiar "call step() and read fields" shape. A session is bound to one
(text, pattern, algorithm) triple; changing any of them means creating
a new session.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from stepmatch.tables import BadCharTable, build_bad_char, build_lps, validate_pattern
from stepmatch.types import Algorithm, Outcome, Pattern, Symbol, Text

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StepReport:
    """What one step did, for renderers and step logs.

    Comparison fields are None for FINISHED and IDLE steps.
    """
    algorithm: Algorithm
    outcome: Outcome
    comparisons: int                        # total after this step
    text_index: int | None = None
    pattern_index: int | None = None
    text_char: Symbol | None = None
    pattern_char: Symbol | None = None
    alignment: int | None = None            # pattern start in text when compared
    new_matches: tuple[int, ...] = ()
    shift: int | None = None                # BM: how far the alignment moved
    bad_char: int | None = None             # BM: table value the shift came from
    fallback: int | None = None             # KMP: new j after an LPS lookup

    @property
    def is_match(self) -> bool:
        return self.outcome is Outcome.MATCH


@dataclass(frozen=True, slots=True)
class KMPState:
    text: Text
    pattern: Pattern
    lps: tuple[int, ...]
    i: int = 0
    j: int = 0
    comparisons: int = 0
    finished: bool = False
    found: tuple[int, ...] = ()

    @property
    def alignment(self) -> int:
        return self.i - self.j


@dataclass(frozen=True, slots=True)
class BMState:
    text: Text
    pattern: Pattern
    bad_char: BadCharTable
    s: int = 0
    j: int | None = None
    comparisons: int = 0
    finished: bool = False
    found: tuple[int, ...] = ()

    @property
    def alignment(self) -> int:
        return self.s


def _check_inputs(text: Text, pattern: Pattern) -> None:
    validate_pattern(pattern)
    if not isinstance(text, (str, bytes)):
        raise TypeError(f"Text must be str or bytes, got {type(text).__name__}")
    if type(text) is not type(pattern):
        raise TypeError(
            f"Text and pattern must be the same kind, got "
            f"{type(text).__name__} and {type(pattern).__name__}"
        )


def new_kmp_state(text: Text, pattern: Pattern) -> KMPState:
    _check_inputs(text, pattern)
    return KMPState(text=text, pattern=pattern, lps=tuple(build_lps(pattern)))


def new_bm_state(text: Text, pattern: Pattern) -> BMState:
    _check_inputs(text, pattern)
    return BMState(
        text=text, pattern=pattern, bad_char=build_bad_char(pattern),
        j=len(pattern) - 1,
    )


def step_kmp(state: KMPState) -> tuple[KMPState, StepReport]:
    """One KMP transition. Returns the same state object once finished."""
    if state.finished:
        return state, StepReport(Algorithm.KMP, Outcome.IDLE, state.comparisons)

    text, pattern, lps = state.text, state.pattern, state.lps
    n, m = len(text), len(pattern)
    i, j = state.i, state.j

    if i >= n:
        log.debug("KMP finished: %d comparisons, found=%s",
                  state.comparisons, list(state.found))
        return (
            replace(state, finished=True),
            StepReport(Algorithm.KMP, Outcome.FINISHED, state.comparisons),
        )

    t_ch, p_ch = text[i], pattern[j]
    matched = t_ch == p_ch
    comparisons = state.comparisons + 1
    alignment = i - j
    found = state.found
    new_matches: tuple[int, ...] = ()
    fallback: int | None = None

    if matched:
        i += 1
        j += 1
        if j == m:
            new_matches = (i - m,)
            found = found + new_matches
            # resume inside the match so overlapping occurrences survive
            j = lps[j - 1]
            fallback = j
    elif j != 0:
        j = lps[j - 1]
        fallback = j
    else:
        i += 1

    report = StepReport(
        algorithm=Algorithm.KMP,
        outcome=Outcome.MATCH if matched else Outcome.MISMATCH,
        comparisons=comparisons,
        text_index=state.i,
        pattern_index=state.j,
        text_char=t_ch,
        pattern_char=p_ch,
        alignment=alignment,
        new_matches=new_matches,
        fallback=fallback,
    )
    log.debug("KMP compare text[%d] pat[%d] -> %s",
              state.i, state.j, report.outcome.name)
    return (
        replace(state, i=i, j=j, comparisons=comparisons, found=found),
        report,
    )


def step_bm(state: BMState) -> tuple[BMState, StepReport]:
    """One Boyer-Moore (bad-character) transition.

    Shift rules, with bc = bad_char.lookup(c) = m - 1 - k for the
    rightmost occurrence k of c (k = -1 when absent):

      full match at s:  look at c = text[s+m]; moving by bc + 1 = m - k
                        puts c under its rightmost occurrence. Past the
                        end of the text, move by 1 (which finishes).
      mismatch at j:    c = text[s+j]; moving by j - k puts c under its
                        rightmost occurrence, i.e. bc - (m - 1 - j).
                        Floored at 1 when k > j. For j = m - 1 this is
                        max(1, bc).
    """
    if state.finished:
        return state, StepReport(Algorithm.BOYER_MOORE, Outcome.IDLE, state.comparisons)

    text, pattern, table = state.text, state.pattern, state.bad_char
    n, m = len(text), len(pattern)
    s = state.s

    if s > n - m:
        log.debug("BM finished: %d comparisons, found=%s",
                  state.comparisons, list(state.found))
        return (
            replace(state, finished=True),
            StepReport(Algorithm.BOYER_MOORE, Outcome.FINISHED, state.comparisons),
        )

    j = state.j
    if j is None or not 0 <= j < m:
        j = m - 1

    comp_idx = s + j
    t_ch, p_ch = text[comp_idx], pattern[j]
    matched = p_ch == t_ch
    comparisons = state.comparisons + 1
    found = state.found
    new_matches: tuple[int, ...] = ()
    shift: int | None = None
    bc: int | None = None
    next_j = j - 1

    if matched:
        if next_j < 0:
            new_matches = (s,)
            found = found + new_matches
            if s + m < n:
                bc = table.lookup(text[s + m])
                shift = bc + 1
            else:
                shift = 1
            next_j = m - 1
    else:
        bc = table.lookup(t_ch)
        shift = max(1, bc - (m - 1 - j))
        next_j = m - 1

    report = StepReport(
        algorithm=Algorithm.BOYER_MOORE,
        outcome=Outcome.MATCH if matched else Outcome.MISMATCH,
        comparisons=comparisons,
        text_index=comp_idx,
        pattern_index=j,
        text_char=t_ch,
        pattern_char=p_ch,
        alignment=s,
        new_matches=new_matches,
        shift=shift,
        bad_char=bc,
    )
    log.debug("BM compare text[%d] pat[%d] -> %s shift=%s",
              comp_idx, j, report.outcome.name, shift)
    return (
        replace(
            state, s=s + (shift or 0), j=next_j,
            comparisons=comparisons, found=found,
        ),
        report,
    )


class MatchSession:
    """One search over a fixed (text, pattern, algorithm) triple.

    Usage:
        session = create_session("hello world", "world", "bm")
        while not session.finished:
            report = session.step()
        session.found  # (6,)

    step() is safe to call after the search has finished; it returns
    an IDLE report and leaves every field untouched.
    """

    __slots__ = ("_algorithm", "_state")

    def __init__(self, text: Text, pattern: Pattern, algorithm: Algorithm | str) -> None:
        self._algorithm = Algorithm.parse(algorithm)
        self._state: KMPState | BMState
        if self._algorithm is Algorithm.KMP:
            self._state = new_kmp_state(text, pattern)
        else:
            self._state = new_bm_state(text, pattern)
        log.debug("Created %s session: n=%d m=%d",
                  self._algorithm.label, len(text), len(pattern))

    def step(self) -> StepReport:
        """Advance by one comparison and report what happened."""
        if isinstance(self._state, KMPState):
            self._state, report = step_kmp(self._state)
        else:
            self._state, report = step_bm(self._state)
        return report

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    @property
    def state(self) -> KMPState | BMState:
        """The current immutable state snapshot."""
        return self._state

    @property
    def text(self) -> Text:
        return self._state.text

    @property
    def pattern(self) -> Pattern:
        return self._state.pattern

    @property
    def table(self) -> tuple[int, ...] | BadCharTable:
        if isinstance(self._state, KMPState):
            return self._state.lps
        return self._state.bad_char

    @property
    def finished(self) -> bool:
        return self._state.finished

    @property
    def comparisons(self) -> int:
        return self._state.comparisons

    @property
    def found(self) -> tuple[int, ...]:
        return self._state.found

    @property
    def alignment(self) -> int:
        return self._state.alignment

    @property
    def pattern_index(self) -> int:
        """Pattern position the next comparison will use."""
        if isinstance(self._state, KMPState):
            return self._state.j
        j = self._state.j
        m = len(self._state.pattern)
        return j if j is not None and 0 <= j < m else m - 1

    def __repr__(self) -> str:
        return (
            f"MatchSession({self._algorithm.label}, comparisons={self.comparisons}, "
            f"found={list(self.found)}, finished={self.finished})"
        )


def create_session(
    text: Text, pattern: Pattern, algorithm: Algorithm | str = Algorithm.KMP
) -> MatchSession:
    """Build the table and initial state for a new search."""
    return MatchSession(text, pattern, algorithm)


def step(session: MatchSession) -> StepReport:
    return session.step()

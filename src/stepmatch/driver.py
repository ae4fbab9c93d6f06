"""Drivers: the cadences that repeatedly call step() on a session.

step() is the only scheduling primitive. Everything here is a loop
around it:

    step_once              one comparison
    run_until_first_match  stop as soon as found is non-empty
    run_to_completion      stop when the session is finished
    AutoPlayer             the same loops, paced by DriverConfig.delay_ms
                           and cancellable from another thread

Cancelling is just not calling step() again; sessions hold no
resources, so there is nothing to clean up.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from stepmatch.config import DriverConfig
from stepmatch.session import MatchSession, StepReport, create_session
from stepmatch.types import Algorithm, Pattern, Text

log = logging.getLogger(__name__)

StepCallback = Callable[[StepReport], None]


class StepBudgetExceeded(RuntimeError):
    """Raised when a driver loop takes more steps than it was allowed."""

    def __init__(self, max_steps: int, session: MatchSession) -> None:
        self.max_steps = max_steps
        self.session = session
        super().__init__(
            f"Session not finished after {max_steps} step(s) "
            f"({session.comparisons} comparisons, {len(session.found)} match(es))"
        )


def step_once(session: MatchSession) -> StepReport:
    return session.step()


def _run(
    session: MatchSession,
    until_match: bool,
    max_steps: int | None,
    on_step: StepCallback | None = None,
) -> list[StepReport]:
    reports: list[StepReport] = []
    while not session.finished:
        if until_match and session.found:
            break
        if max_steps is not None and len(reports) >= max_steps:
            raise StepBudgetExceeded(max_steps, session)
        report = session.step()
        reports.append(report)
        if on_step is not None:
            on_step(report)
    return reports


def run_until_first_match(
    session: MatchSession,
    max_steps: int | None = None,
    on_step: StepCallback | None = None,
) -> list[StepReport]:
    """Step until a match is recorded or the session finishes.

    Returns the reports of the steps taken; an empty list when the
    session already had a match (or was already finished).
    """
    reports = _run(session, until_match=True, max_steps=max_steps, on_step=on_step)
    if session.found:
        log.info("%s stopped at first match index %d after %d step(s)",
                 session.algorithm.label, session.found[0], len(reports))
    return reports


def run_to_completion(
    session: MatchSession,
    max_steps: int | None = None,
    on_step: StepCallback | None = None,
) -> list[StepReport]:
    """Step until the session is finished and return every report."""
    reports = _run(session, until_match=False, max_steps=max_steps, on_step=on_step)
    log.info("%s finished: %d comparisons, %d match(es)",
             session.algorithm.label, session.comparisons, len(session.found))
    return reports


def search(
    text: Text, pattern: Pattern, algorithm: Algorithm | str = Algorithm.KMP
) -> list[int]:
    """One-shot search: every (possibly overlapping) match start."""
    session = create_session(text, pattern, algorithm)
    run_to_completion(session)
    return list(session.found)


class AutoPlayer:
    """Timed auto-play over one session.

    Usage:
        player = AutoPlayer(session, DriverConfig(delay_ms=200), on_step=print)
        player.play()          # blocks; call player.stop() from elsewhere

    The pause between steps is an Event wait, so stop() takes effect
    within one delay rather than after the whole run. A stop stays in
    force, including one requested before play() starts, until reset().
    """

    def __init__(
        self,
        session: MatchSession,
        config: DriverConfig | None = None,
        on_step: StepCallback | None = None,
    ) -> None:
        self._session = session
        self._config = config or DriverConfig()
        self._on_step = on_step
        self._stop = threading.Event()
        self._steps_taken = 0

    @property
    def session(self) -> MatchSession:
        return self._session

    @property
    def steps_taken(self) -> int:
        return self._steps_taken

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def stop(self) -> None:
        self._stop.set()

    def reset(self) -> None:
        """Clear a previous stop() so the player can be resumed."""
        self._stop.clear()

    def play(self) -> list[StepReport]:
        """Step on the configured cadence until finished or stopped."""
        return self._play(until_match=False)

    def play_until_match(self) -> list[StepReport]:
        """Like play(), but also stop once the first match is found."""
        return self._play(until_match=True)

    def _play(self, until_match: bool) -> list[StepReport]:
        session = self._session
        max_steps = self._config.max_steps
        delay = self._config.delay_seconds
        reports: list[StepReport] = []

        if until_match and session.found:
            log.debug("Already found a match at index %d", session.found[0])
            return reports

        while not session.finished and not self._stop.is_set():
            if max_steps is not None and len(reports) >= max_steps:
                raise StepBudgetExceeded(max_steps, session)
            report = session.step()
            reports.append(report)
            self._steps_taken += 1
            if self._on_step is not None:
                self._on_step(report)
            if until_match and session.found:
                log.info("Stopping at first match index %d", session.found[0])
                break
            if session.finished:
                break
            if delay and self._stop.wait(delay):
                break

        if self._stop.is_set():
            log.debug("Auto-play stopped after %d step(s)", len(reports))
        return reports

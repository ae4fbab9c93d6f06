"""Tests for the driver cadences and auto-play."""
from __future__ import annotations

import threading
import time

import pytest

from stepmatch.config import DriverConfig
from stepmatch.driver import (
    AutoPlayer,
    StepBudgetExceeded,
    run_to_completion,
    run_until_first_match,
    search,
    step_once,
)
from stepmatch.session import create_session
from stepmatch.types import Outcome

from tests.conftest import random_text


class TestRunLoops:
    def test_step_once(self, make_session):
        session = make_session("ab", "b")
        report = step_once(session)
        assert report.outcome.is_comparison()
        assert session.comparisons == 1

    def test_run_until_first_match_stops_early(self, make_session):
        session = make_session("abcabc", "bc")
        reports = run_until_first_match(session)
        assert session.found == (1,)
        assert not session.finished
        assert reports[-1].new_matches == (1,)

    def test_run_until_first_match_is_noop_once_found(self, make_session):
        session = make_session("abcabc", "bc")
        run_until_first_match(session)
        before = session.state
        assert run_until_first_match(session) == []
        assert session.state is before

    def test_run_until_first_match_without_match_finishes(self, make_session):
        session = make_session("aaaa", "b")
        reports = run_until_first_match(session)
        assert session.finished
        assert reports[-1].outcome is Outcome.FINISHED

    def test_run_to_completion_after_first_match(self, make_session):
        session = make_session("abcabc", "bc")
        run_until_first_match(session)
        run_to_completion(session)
        assert session.found == (1, 4)
        assert session.finished

    def test_run_to_completion_returns_every_report(self, make_session):
        session = make_session("hello world", "world")
        reports = run_to_completion(session)
        assert sum(r.outcome.is_comparison() for r in reports) == session.comparisons
        assert reports[-1].outcome is Outcome.FINISHED

    def test_on_step_callback(self, make_session):
        seen = []
        session = make_session("abab", "ab")
        run_to_completion(session, on_step=seen.append)
        assert len(seen) > 0
        assert seen[-1].outcome is Outcome.FINISHED

    def test_step_budget(self, make_session):
        session = make_session(random_text(500), "abba")
        with pytest.raises(StepBudgetExceeded, match="not finished after 10 step"):
            run_to_completion(session, max_steps=10)
        assert session.comparisons == 10
        assert not session.finished

    def test_budget_large_enough(self, make_session):
        session = make_session("abc", "c")
        run_to_completion(session, max_steps=100)
        assert session.found == (2,)

    def test_search_one_shot(self):
        assert search("abababa", "aba", "bm") == [0, 2, 4]
        assert search("abababa", "aba") == [0, 2, 4]
        assert search("", "a") == []


class TestAutoPlayer:
    def test_play_runs_to_completion(self, make_session):
        session = make_session("hello world", "world")
        player = AutoPlayer(session, DriverConfig(delay_ms=0))
        reports = player.play()
        assert session.finished
        assert session.found == (6,)
        assert player.steps_taken == len(reports)

    def test_play_until_match(self, make_session):
        session = make_session("xxabxxab", "ab")
        player = AutoPlayer(session, DriverConfig(delay_ms=0))
        player.play_until_match()
        assert session.found == (2,)
        assert not session.finished
        # already have a match: nothing more to do
        assert player.play_until_match() == []
        player.play()
        assert session.found == (2, 6)

    def test_stop_from_callback(self, make_session):
        session = make_session(random_text(200), "abba")
        player: AutoPlayer

        def on_step(report):
            player.stop()

        player = AutoPlayer(session, DriverConfig(delay_ms=0), on_step=on_step)
        reports = player.play()
        assert len(reports) == 1
        assert player.stopped
        assert not session.finished

    def test_stop_from_another_thread(self):
        session = create_session(random_text(5000), "abba", "kmp")
        player = AutoPlayer(session, DriverConfig(delay_ms=20))
        worker = threading.Thread(target=player.play)
        worker.start()
        time.sleep(0.1)
        player.stop()
        worker.join(timeout=2.0)
        assert not worker.is_alive()
        assert not session.finished
        assert 0 < player.steps_taken < 5000

    def test_stop_before_play_is_honoured(self, make_session):
        session = make_session("abcabc", "bc")
        player = AutoPlayer(session, DriverConfig(delay_ms=0))
        player.stop()
        assert player.play() == []
        assert player.play_until_match() == []
        assert player.steps_taken == 0
        assert session.comparisons == 0
        assert player.stopped

    def test_stop_before_worker_starts(self):
        session = create_session("ab" * 20000, "zz", "kmp")
        player = AutoPlayer(session, DriverConfig(delay_ms=0))
        player.stop()
        worker = threading.Thread(target=player.play)
        worker.start()
        worker.join(timeout=2.0)
        assert not worker.is_alive()
        assert player.steps_taken == 0
        assert not session.finished

    def test_reset_resumes_after_stop(self, make_session):
        session = make_session("abcabc", "bc")
        player = AutoPlayer(session, DriverConfig(delay_ms=0))
        player.stop()
        player.play()
        player.reset()
        assert not player.stopped
        player.play()
        assert session.finished
        assert session.found == (1, 4)

    def test_max_steps_from_config(self, make_session):
        session = make_session(random_text(500), "abba")
        player = AutoPlayer(session, DriverConfig(delay_ms=0, max_steps=5))
        with pytest.raises(StepBudgetExceeded):
            player.play()
        assert session.comparisons == 5

    def test_default_config(self, make_session):
        player = AutoPlayer(make_session("a", "a"))
        assert player.session.pattern == "a"
        assert not player.stopped

"""Shared fixtures and helpers for the matching engine tests."""
from __future__ import annotations

import random

import pytest

from stepmatch.session import MatchSession, create_session
from stepmatch.types import Algorithm

SEED = 42

ALGORITHMS = [Algorithm.KMP, Algorithm.BOYER_MOORE]


def naive_find_all(text, pattern) -> list[int]:
    """Brute-force oracle: every (overlapping) match start."""
    m = len(pattern)
    return [i for i in range(len(text) - m + 1) if text[i:i + m] == pattern]


def run(session: MatchSession) -> int:
    """Step until finished; return the number of steps taken."""
    steps = 0
    while not session.finished:
        session.step()
        steps += 1
    return steps


def random_text(length: int, alphabet: str = "ab", seed: int = SEED) -> str:
    rng = random.Random(seed)
    return "".join(rng.choice(alphabet) for _ in range(length))


@pytest.fixture(params=ALGORITHMS, ids=lambda a: a.value)
def algorithm(request) -> Algorithm:
    return request.param


@pytest.fixture()
def make_session(algorithm):
    """Factory for sessions of the parametrized algorithm."""
    def _make(text, pattern) -> MatchSession:
        return create_session(text, pattern, algorithm)
    return _make

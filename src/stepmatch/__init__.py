"""Steppable KMP and Boyer-Moore string matching.

Re-exports the public API:
    from stepmatch import create_session, step, build_table, Algorithm
"""
from stepmatch.config import DriverConfig
from stepmatch.driver import (
    AutoPlayer,
    StepBudgetExceeded,
    run_to_completion,
    run_until_first_match,
    search,
    step_once,
)
from stepmatch.session import (
    BMState,
    KMPState,
    MatchSession,
    StepReport,
    create_session,
    step,
    step_bm,
    step_kmp,
)
from stepmatch.tables import (
    BadCharTable,
    InvalidPattern,
    build_bad_char,
    build_lps,
    build_table,
)
from stepmatch.types import Algorithm, Outcome

__all__ = [
    "Algorithm",
    "AutoPlayer",
    "BMState",
    "BadCharTable",
    "DriverConfig",
    "InvalidPattern",
    "KMPState",
    "MatchSession",
    "Outcome",
    "StepBudgetExceeded",
    "StepReport",
    "build_bad_char",
    "build_lps",
    "build_table",
    "create_session",
    "run_to_completion",
    "run_until_first_match",
    "search",
    "step",
    "step_bm",
    "step_kmp",
    "step_once",
]

"""stepmatch CLI entry point.

Usage: uv run stepmatch [command]

    stepmatch table PATTERN [-a kmp|bm]
    stepmatch search TEXT PATTERN [-a kmp|bm] [--trace]
    stepmatch compare TEXT PATTERN
    stepmatch step TEXT PATTERN [-a kmp|bm] [--delay-ms N] [--max-steps N]
"""
from __future__ import annotations

import argparse
import logging
import sys

from stepmatch.config import DEFAULT_DELAY_MS, DriverConfig
from stepmatch.driver import AutoPlayer, StepBudgetExceeded, run_to_completion
from stepmatch.render import (
    format_bad_char_table,
    format_comparison,
    format_lps_table,
    format_report_alignment,
    format_step,
    format_summary,
    format_table,
)
from stepmatch.session import MatchSession, StepReport, create_session
from stepmatch.tables import BadCharTable, build_table
from stepmatch.types import Algorithm

STEP_COMMANDS = "n(next), a(auto), p(play to first match), f(finish), q(quit)"


def _add_algorithm_option(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "-a", "--algorithm", choices=[a.value for a in Algorithm], default="kmp",
        help="Matching engine (default: kmp)",
    )


def _add_parsers(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser("table", help="Print the precomputed table for a pattern.")
    p.add_argument("pattern")
    _add_algorithm_option(p)

    p = subparsers.add_parser("search", help="Run a search to completion.")
    p.add_argument("text")
    p.add_argument("pattern")
    _add_algorithm_option(p)
    p.add_argument(
        "--trace", action="store_true",
        help="Print every step, not just the result.",
    )

    p = subparsers.add_parser(
        "compare", help="Run both engines and compare comparison counts.",
    )
    p.add_argument("text")
    p.add_argument("pattern")

    p = subparsers.add_parser(
        "step", help="Step through a search interactively (commands on stdin).",
    )
    p.add_argument("text")
    p.add_argument("pattern")
    _add_algorithm_option(p)
    p.add_argument(
        "--delay-ms", type=int, default=DEFAULT_DELAY_MS,
        help=f"Pause between auto-play steps (default: {DEFAULT_DELAY_MS})",
    )
    p.add_argument(
        "--max-steps", type=int, default=None,
        help="Pause a/p/f after this many steps; the session stays open (default: unbounded)",
    )


def _print_step(session: MatchSession, report: StepReport) -> None:
    for message in format_step(report):
        print(message)
    if report.outcome.is_comparison():
        print(format_report_alignment(session, report))
        print(f"Comparisons so far: {report.comparisons}")


def _run_table(args: argparse.Namespace) -> None:
    table = build_table(args.pattern, args.algorithm)
    if isinstance(table, BadCharTable):
        print(format_bad_char_table(table))
    else:
        print(format_lps_table(args.pattern, table))


def _run_search(args: argparse.Namespace) -> None:
    session = create_session(args.text, args.pattern, args.algorithm)
    on_step = (lambda r: _print_step(session, r)) if args.trace else None
    run_to_completion(session, on_step=on_step)
    print(format_summary(session))


def _run_compare(args: argparse.Namespace) -> None:
    kmp = create_session(args.text, args.pattern, Algorithm.KMP)
    bm = create_session(args.text, args.pattern, Algorithm.BOYER_MOORE)
    run_to_completion(kmp)
    run_to_completion(bm)
    print(format_comparison(kmp, bm))


def _run_step(args: argparse.Namespace) -> None:
    config = DriverConfig(delay_ms=args.delay_ms, max_steps=args.max_steps)
    session = create_session(args.text, args.pattern, args.algorithm)

    def show(report: StepReport) -> None:
        _print_step(session, report)

    print(format_table(session))
    print()
    print(f"Interactive stepping: commands: {STEP_COMMANDS}")

    while not session.finished:
        print("> ", end="", flush=True)
        line = sys.stdin.readline()
        if not line:
            break  # EOF
        cmd = line.strip() or "n"
        if cmd == "q":
            break
        if cmd == "n":
            show(session.step())
        elif cmd in ("a", "p"):
            player = AutoPlayer(session, config, on_step=show)
            try:
                if cmd == "a":
                    player.play()
                else:
                    player.play_until_match()
            except KeyboardInterrupt:
                # play() runs on this thread; the interrupt already ended it
                print("\nAuto-play stopped")
            except StepBudgetExceeded as exc:
                print(exc)
        elif cmd == "f":
            try:
                run_to_completion(session, max_steps=config.max_steps, on_step=show)
            except StepBudgetExceeded as exc:
                print(exc)
        else:
            print(f"Unknown command {cmd!r}; commands: {STEP_COMMANDS}")

    print(format_summary(session))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="stepmatch",
        description="Step through KMP and Boyer-Moore string matching one comparison at a time.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log every step at DEBUG level to stderr.",
    )
    subparsers = parser.add_subparsers(dest="command")

    _add_parsers(subparsers)

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    handlers = {
        "table": _run_table,
        "search": _run_search,
        "compare": _run_compare,
        "step": _run_step,
    }
    try:
        handlers[args.command](args)
    except ValueError as exc:
        # InvalidPattern, unknown algorithms and bad DriverConfig values
        parser.error(str(exc))

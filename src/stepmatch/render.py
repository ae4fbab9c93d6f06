"""Plain-text rendering of tables, alignments and step reports.

Every function returns a string. Nothing here reads session internals
beyond the public accessors, and nothing here affects a search.
"""
from __future__ import annotations

from collections.abc import Sequence

from stepmatch.session import MatchSession, StepReport
from stepmatch.tables import BadCharTable
from stepmatch.types import Outcome, Pattern, Symbol, Text


def format_symbol(ch: Symbol) -> str:
    """Display one code unit: a str character, or a byte value."""
    if isinstance(ch, int):
        if 0x20 <= ch < 0x7F:
            return chr(ch)
        return f"\\x{ch:02x}"
    return ch


def _columns(seq: Text | Pattern) -> str:
    """One display column per code unit."""
    if isinstance(seq, bytes):
        return "".join(chr(b) if 0x20 <= b < 0x7F else "." for b in seq)
    return seq


def _row(label: str, cells: Sequence[object], width: int) -> str:
    return f"{label:<8}" + " ".join(f"{str(c):>{width}}" for c in cells)


def format_lps_table(pattern: Pattern, lps: Sequence[int]) -> str:
    """Index / Char / LPS rows for a KMP failure table."""
    chars = [format_symbol(c) for c in pattern]
    width = max(len(str(len(pattern) - 1)), max(len(c) for c in chars))
    lines = [
        "LPS (failure function)",
        _row("Index", range(len(pattern)), width),
        _row("Char", chars, width),
        _row("LPS", lps, width),
    ]
    return "\n".join(lines)


def format_bad_char_table(table: BadCharTable) -> str:
    """Char / BadChar / Last rows, keys sorted, with the absent-character default.

    Last is the rightmost index of the character in the pattern.
    """
    keys = sorted(table)
    chars = [format_symbol(k) for k in keys]
    values = [table[k] for k in keys]
    last = [table.last_occurrence(k) for k in keys]
    width = max(len(str(c)) for c in chars + values + last)
    lines = [
        "Bad-character table",
        _row("Char", chars, width),
        _row("BadChar", values, width),
        _row("Last", last, width),
        f"(any other character -> {table.pattern_length})",
    ]
    return "\n".join(lines)


def format_table(session: MatchSession) -> str:
    table = session.table
    if isinstance(table, BadCharTable):
        return format_bad_char_table(table)
    return format_lps_table(session.pattern, table)


def format_alignment(
    text: Text,
    pattern: Pattern,
    alignment: int,
    text_index: int | None = None,
    is_match: bool = False,
) -> str:
    """Text, the pattern shifted under it, and a caret line.

    The caret line carries M (match) or X (mismatch) under the
    compared text position, and is blank when nothing was compared.
    """
    lines = [_columns(text), " " * max(0, alignment) + _columns(pattern)]
    if text_index is not None and 0 <= text_index < len(text):
        lines.append(" " * text_index + ("M" if is_match else "X"))
    else:
        lines.append("")
    return "\n".join(lines)


def format_report_alignment(session: MatchSession, report: StepReport) -> str:
    if not report.outcome.is_comparison():
        return format_alignment(session.text, session.pattern, session.alignment)
    return format_alignment(
        session.text, session.pattern, report.alignment,
        report.text_index, report.is_match,
    )


def format_step(report: StepReport) -> list[str]:
    """Human-readable messages for one step, in the order they happened."""
    label = report.algorithm.label
    if report.outcome is Outcome.FINISHED:
        return [f"{label} finished"]
    if report.outcome is Outcome.IDLE:
        return []

    verdict = "MATCH" if report.is_match else "MISMATCH"
    messages = [
        f"Compare text[{report.text_index}]='{format_symbol(report.text_char)}' "
        f"with pat[{report.pattern_index}]='{format_symbol(report.pattern_char)}' "
        f"-> {verdict}"
    ]
    for idx in report.new_matches:
        messages.append(f"Pattern found at index {idx}")
    if report.outcome is Outcome.MISMATCH and report.shift is not None:
        messages.append(
            f"Bad-char table['{format_symbol(report.text_char)}']={report.bad_char} "
            f"-> shift {report.shift}"
        )
    elif report.shift is not None:
        messages.append(f"Shift {report.shift}")
    if report.fallback is not None:
        messages.append(f"Fall back j -> {report.fallback}")
    return messages


def format_summary(session: MatchSession) -> str:
    found = ", ".join(str(i) for i in session.found) or "none"
    state = "finished" if session.finished else "in progress"
    return (
        f"{session.algorithm.label} {state}: "
        f"{session.comparisons} comparison(s), matches at: {found}"
    )


def format_comparison(kmp: MatchSession, bm: MatchSession) -> str:
    """Side-by-side comparison counts for the two engines on one input."""
    agree = "yes" if kmp.found == bm.found else "NO"
    lines = [
        f"{'Metric':<16} {'KMP':>10} {'BM':>10}",
        "-" * 38,
        f"{'Comparisons':<16} {kmp.comparisons:>10} {bm.comparisons:>10}",
        f"{'Matches':<16} {len(kmp.found):>10} {len(bm.found):>10}",
        f"Match lists agree: {agree}",
    ]
    return "\n".join(lines)

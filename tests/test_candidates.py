"""Tests for candidate deduplication and ordering."""

from __future__ import annotations

from datetime import date

from freshkeeper.domain.label import DateCandidate, RawDateMatch
from freshkeeper.label.candidates import build_candidate_set, collect_candidates


def _candidate(raw: str, resolved: date, kind: str = "generic_numeric") -> DateCandidate:
    return DateCandidate(raw_match=raw, resolved_date=resolved, source_kind=kind)  # type: ignore[arg-type]


def test_calendar_equal_candidates_collapse_to_one() -> None:
    labeled = _candidate("EXP 01-02-24", date(2024, 2, 1), "expiry_labeled")
    generic = _candidate("01-02-2024", date(2024, 2, 1))

    result = build_candidate_set([labeled, generic])

    assert [c.resolved_date for c in result] == [date(2024, 2, 1)]


def test_candidates_are_sorted_ascending() -> None:
    result = build_candidate_set(
        [
            _candidate("c", date(2025, 3, 1)),
            _candidate("a", date(2024, 12, 1)),
            _candidate("b", date(2025, 1, 15)),
        ]
    )

    assert [c.resolved_date for c in result] == [date(2024, 12, 1), date(2025, 1, 15), date(2025, 3, 1)]


def test_input_order_does_not_change_the_set() -> None:
    items = [
        _candidate("x", date(2025, 5, 1)),
        _candidate("y", date(2025, 4, 1)),
        _candidate("z", date(2025, 5, 1), "expiry_labeled"),
    ]

    forward = build_candidate_set(items)
    backward = build_candidate_set(list(reversed(items)))

    assert [c.resolved_date for c in forward] == [c.resolved_date for c in backward]


def test_empty_input_gives_empty_set() -> None:
    assert build_candidate_set([]) == ()


def test_collect_candidates_drops_implausible_matches() -> None:
    matches = [
        RawDateMatch("15/08/2025", "15", "08", "2025", "generic_numeric"),
        RawDateMatch("15/08/25", "15", "08", "25", "generic_numeric"),
        RawDateMatch("01/01/1999", "01", "01", "1999", "generic_numeric"),
        RawDateMatch("45/45/2025", "45", "45", "2025", "generic_numeric"),
    ]

    result = collect_candidates(matches, today=date(2025, 8, 1))

    assert [c.resolved_date for c in result] == [date(2025, 8, 15)]

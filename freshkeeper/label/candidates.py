"""Candidate set construction: normalize, deduplicate, order."""

from collections.abc import Iterable
from datetime import date

from freshkeeper.domain.label import DateCandidate, RawDateMatch

from .date_normalizer import normalize_match
from .settings import DEFAULT_SCAN_SETTINGS, ScanSettings


def build_candidate_set(candidates: Iterable[DateCandidate]) -> tuple[DateCandidate, ...]:
    """Collapse candidates with equal calendar dates and sort ascending."""
    by_date: dict[date, DateCandidate] = {}
    for candidate in candidates:
        # First representative wins; duplicates are calendar-equal anyway.
        by_date.setdefault(candidate.resolved_date, candidate)
    return tuple(by_date[d] for d in sorted(by_date))


def collect_candidates(
    matches: Iterable[RawDateMatch],
    today: date,
    settings: ScanSettings = DEFAULT_SCAN_SETTINGS,
) -> tuple[DateCandidate, ...]:
    """Normalize every raw match and return the deduplicated candidate set."""
    normalized = (normalize_match(match, today, settings) for match in matches)
    return build_candidate_set(c for c in normalized if c is not None)

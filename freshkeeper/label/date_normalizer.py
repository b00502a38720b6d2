"""Turn raw date matches into validated expiry date candidates."""

from datetime import date, timedelta

from freshkeeper.domain.label import DateCandidate, RawDateMatch

from .settings import DEFAULT_SCAN_SETTINGS, ScanSettings


def expand_two_digit_year(year_text: str, today: date) -> int:
    """
    Expand a 2-digit year relative to the current century.

    00-50 map into the current century, 51-99 into the previous one.
    Longer year strings are returned as-is.
    """
    value = int(year_text)
    if len(year_text) != 2:
        return value
    century = today.year // 100 * 100
    return century + value if value <= 50 else century - 100 + value


def resolve_day_month(year: int, month: int, day: int) -> date | None:
    """Build a date reading the triple as D/M first, then as M/D."""
    try:
        return date(year, month, day)
    except ValueError:
        pass
    # Genuinely ambiguous triples (both parts <= 12) never reach this branch,
    # so they are always read day-first.
    try:
        return date(year, day, month)
    except ValueError:
        return None


def add_years(value: date, years: int) -> date:
    """Move a date forward by whole calendar years; Feb 29 rolls to Mar 1."""
    try:
        return value.replace(year=value.year + years)
    except ValueError:
        return value.replace(year=value.year + years, month=3, day=1)


def normalize_match(
    match: RawDateMatch,
    today: date,
    settings: ScanSettings = DEFAULT_SCAN_SETTINGS,
) -> DateCandidate | None:
    """
    Normalize one raw match into a candidate, or None if it is not plausible.

    Unparseable or out-of-range matches are dropped without error: OCR text is
    noisy and a bad match only means one fewer candidate.
    """
    try:
        year = expand_two_digit_year(match.year, today)
        month = int(match.month)
        day = int(match.day)
    except ValueError:
        return None

    resolved = resolve_day_month(year, month, day)
    if resolved is None:
        return None

    if match.source_kind == "manufacture_labeled":
        try:
            resolved = add_years(resolved, settings.manufacture_shelf_life_years)
        except ValueError:
            # past date.max
            return None

    if not settings.min_year < resolved.year < settings.max_year:
        return None

    if resolved < today - timedelta(days=settings.recency_window_days):
        return None

    return DateCandidate(
        raw_match=match.raw_match,
        resolved_date=resolved,
        source_kind=match.source_kind,
    )

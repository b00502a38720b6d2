"""Tests for date-shaped substring detection."""

from freshkeeper.label.date_patterns import DATE_PATTERNS, find_date_matches, iter_pattern_matches, strip_date_patterns


def _kinds(text: str) -> list[str]:
    return [m.source_kind for m in find_date_matches(text)]


def test_expiry_labels_are_recognized_case_insensitively() -> None:
    for text in ("EXP: 15/08/2025", "Expiry 15-08-2025", "expires 15.08.2025", "BEST BEFORE 15/08/2025", "Use by:15/08/25"):
        assert "expiry_labeled" in _kinds(text), text


def test_manufacture_labels_are_recognized() -> None:
    for text in ("MFG: 01/01/2024", "Manufactured 01-01-2024", "MFD 01.01.24", "Production Date: 01/01/2024"):
        assert "manufacture_labeled" in _kinds(text), text


def test_labeled_match_captures_day_month_year_in_order() -> None:
    expiry = iter_pattern_matches("EXP: 15/08/2025", DATE_PATTERNS[0])

    assert len(expiry) == 1
    assert (expiry[0].day, expiry[0].month, expiry[0].year) == ("15", "08", "2025")
    assert expiry[0].raw_match == "EXP: 15/08/2025"


def test_iso_first_reads_year_month_day() -> None:
    iso = [m for m in find_date_matches("Packed 2025-03-07") if m.source_kind == "iso_first"]

    assert len(iso) == 1
    assert (iso[0].year, iso[0].month, iso[0].day) == ("2025", "03", "07")


def test_all_patterns_run_and_every_occurrence_is_returned() -> None:
    # Merged rotation passes repeat the same date.
    text = "EXP 01-02-24\n01-02-2024\nEXP 01-02-24"

    kinds = _kinds(text)

    assert kinds.count("expiry_labeled") == 2
    # The labeled form also matches the bare two-digit-year pattern.
    assert kinds.count("generic_numeric") == 3


def test_two_digit_generic_does_not_split_a_four_digit_year() -> None:
    matches = [m for m in find_date_matches("15/08/2025") if m.source_kind == "generic_numeric"]

    assert [m.year for m in matches] == ["2025"]


def test_text_without_dates_has_no_matches() -> None:
    assert find_date_matches("Fresh Milk 500ml\nKeep refrigerated") == []


def test_strip_date_patterns_removes_labeled_and_bare_dates() -> None:
    stripped = strip_date_patterns("EXP: 15/08/2025\nMFG 01/01/2024\nPacked 2025-03-07\nFresh Milk")

    assert "2025" not in stripped
    assert "2024" not in stripped
    assert "EXP" not in stripped
    assert "MFG" not in stripped
    assert "Fresh Milk" in stripped

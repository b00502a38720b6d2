"""Date-shaped substring detection in label OCR text."""

import re
from dataclasses import dataclass

from freshkeeper.domain.label import PatternKind, RawDateMatch

# D/M/Y with 1-2 digit day and month, 2-4 digit year
_DMY = r"(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{2,4})"

EXPIRY_LABEL = r"(?:exp(?:iry)?|expires?|best\s*before|use\s*by)"
MANUFACTURE_LABEL = r"(?:mfg|manufactured|mfd|production\s*date)"


@dataclass(frozen=True)
class DatePattern:
    """One date pattern and how to read its three capture groups."""

    kind: PatternKind
    regex: re.Pattern[str]
    year_first: bool = False


# Priority order; the order only decides which kind a match is tagged with.
DATE_PATTERNS: tuple[DatePattern, ...] = (
    DatePattern("expiry_labeled", re.compile(EXPIRY_LABEL + r"[:\s]*" + _DMY, re.IGNORECASE)),
    DatePattern("manufacture_labeled", re.compile(MANUFACTURE_LABEL + r"[:\s]*" + _DMY, re.IGNORECASE)),
    DatePattern("iso_first", re.compile(r"(\d{4})[/\-.](\d{1,2})[/\-.](\d{1,2})"), year_first=True),
    DatePattern("generic_numeric", re.compile(r"\b(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{4})\b")),
    DatePattern("generic_numeric", re.compile(r"\b(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{2})\b")),
)


def iter_pattern_matches(text: str, pattern: DatePattern) -> list[RawDateMatch]:
    """Return every non-overlapping match of one pattern in text."""
    matches: list[RawDateMatch] = []
    for match in pattern.regex.finditer(text):
        if pattern.year_first:
            year, month, day = match.groups()
        else:
            day, month, year = match.groups()
        matches.append(
            RawDateMatch(
                raw_match=match.group(0),
                day=day,
                month=month,
                year=year,
                source_kind=pattern.kind,
            )
        )
    return matches


def find_date_matches(text: str) -> list[RawDateMatch]:
    """
    Scan text with every date pattern.

    All patterns run over the full text, so the same printed date can show up
    once per pattern that recognizes it (e.g. labeled and generic). Merged
    multi-rotation OCR output also repeats dates; deduplication happens later.
    """
    matches: list[RawDateMatch] = []
    for pattern in DATE_PATTERNS:
        matches.extend(iter_pattern_matches(text, pattern))
    return matches


def strip_date_patterns(text: str) -> str:
    """Remove every date-shaped substring, labeled forms first."""
    for pattern in DATE_PATTERNS:
        text = pattern.regex.sub("", text)
    return text

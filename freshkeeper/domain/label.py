"""Data models for label scanning."""

from dataclasses import dataclass, field
from datetime import date
from typing import Literal

PatternKind = Literal[
    "expiry_labeled",
    "manufacture_labeled",
    "iso_first",
    "generic_numeric",
]

ExpiryStatus = Literal["expired", "use-soon", "safe"]

ResolutionState = Literal[
    "needs_manual_entry",
    "auto_resolved",
    "awaiting_user_choice",
]


@dataclass(frozen=True)
class RawDateMatch:
    """Date-shaped substring as captured by one pattern, before normalization."""

    raw_match: str
    day: str
    month: str
    year: str
    source_kind: PatternKind


@dataclass(frozen=True)
class DateCandidate:
    """A plausible expiry date parsed from label text, not yet confirmed."""

    raw_match: str
    resolved_date: date
    source_kind: PatternKind


@dataclass(frozen=True)
class CandidateChoice:
    """Candidate annotated for display in a date picker."""

    candidate: DateCandidate
    days_left: int
    status: ExpiryStatus


@dataclass(frozen=True)
class ExpiryRecord:
    """Finished product name + expiry date pair ready to be stored."""

    product_name: str
    expiry_date: date


@dataclass(frozen=True)
class LabelScanOutcome:
    """Result of one label parse."""

    state: ResolutionState
    product_name: str
    candidates: tuple[DateCandidate, ...] = field(default_factory=tuple)
    # Only set when state == "auto_resolved".
    record: ExpiryRecord | None = None

    @property
    def candidate_dates(self) -> list[date]:
        return [c.resolved_date for c in self.candidates]

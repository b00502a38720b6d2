"""Decide whether a parsed label can be accepted, needs a choice, or needs manual entry."""

from collections.abc import Sequence
from datetime import date

from freshkeeper.domain.label import CandidateChoice, DateCandidate, ExpiryRecord, LabelScanOutcome

from .expiry_status import classify_expiry, days_until
from .settings import USE_SOON_DAYS


def resolve_candidates(candidates: Sequence[DateCandidate], product_name: str) -> LabelScanOutcome:
    """
    Apply the disambiguation policy to a candidate set.

    - no candidates: the user has to type a date
    - exactly one: accepted without confirmation
    - several: the user picks one; never guessed
    """
    ordered = tuple(sorted(candidates, key=lambda c: c.resolved_date))
    if not ordered:
        return LabelScanOutcome(state="needs_manual_entry", product_name=product_name)

    if len(ordered) == 1:
        record = ExpiryRecord(product_name=product_name, expiry_date=ordered[0].resolved_date)
        return LabelScanOutcome(
            state="auto_resolved",
            product_name=product_name,
            candidates=ordered,
            record=record,
        )

    return LabelScanOutcome(
        state="awaiting_user_choice",
        product_name=product_name,
        candidates=ordered,
    )


def annotate_candidates(
    candidates: Sequence[DateCandidate],
    today: date,
    use_soon_days: int = USE_SOON_DAYS,
) -> list[CandidateChoice]:
    """Attach days-left and status to each candidate for display."""
    return [
        CandidateChoice(
            candidate=candidate,
            days_left=days_until(candidate.resolved_date, today),
            status=classify_expiry(candidate.resolved_date, today, use_soon_days),
        )
        for candidate in candidates
    ]


def choose_candidate(outcome: LabelScanOutcome, chosen_date: date) -> ExpiryRecord:
    """Finish an outcome that is awaiting a choice with one of its offered dates."""
    if outcome.state != "awaiting_user_choice":
        raise ValueError(f"Cannot choose a candidate while {outcome.state}")
    if chosen_date not in outcome.candidate_dates:
        raise ValueError(f"{chosen_date.isoformat()} was not one of the offered dates")
    return ExpiryRecord(product_name=outcome.product_name, expiry_date=chosen_date)


def reject_candidates(outcome: LabelScanOutcome) -> LabelScanOutcome:
    """User rejected every offered date; fall back to manual entry."""
    return LabelScanOutcome(state="needs_manual_entry", product_name=outcome.product_name)


def enter_manual_date(outcome: LabelScanOutcome, expiry_date: date, product_name: str | None = None) -> ExpiryRecord:
    """Finish a manual-entry outcome with a user-supplied date (and optionally a corrected name)."""
    if outcome.state != "needs_manual_entry":
        raise ValueError(f"Manual entry is not expected while {outcome.state}")
    name = (product_name or "").strip() or outcome.product_name
    return ExpiryRecord(product_name=name, expiry_date=expiry_date)

"""Finish a label scan that needed a human decision."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Literal

from freshkeeper.domain.label import ExpiryRecord, LabelScanOutcome
from freshkeeper.domain.pantry import PantryItem
from freshkeeper.label.disambiguation import choose_candidate, enter_manual_date, reject_candidates
from freshkeeper.runtime.pantry_storage import add_item

ConfirmStatus = Literal["saved", "invalid_choice"]


@dataclass(frozen=True)
class ConfirmLabelRequest:
    """
    Inputs for confirming a scanned label.

    Exactly one of chosen_date (pick an offered candidate) or manual_date
    (typed by the user) is expected.
    """

    outcome: LabelScanOutcome
    chosen_date: date | None = None
    manual_date: date | None = None
    product_name: str | None = None
    today: date | None = None


@dataclass(frozen=True)
class ConfirmLabelResult:
    """Outcome of confirming a scanned label."""

    status: ConfirmStatus
    record: ExpiryRecord | None = None
    item: PantryItem | None = None
    error: str | None = None


def run_confirm_label(request: ConfirmLabelRequest) -> ConfirmLabelResult:
    """Turn the user's decision into a stored pantry item."""
    outcome = request.outcome
    try:
        if request.chosen_date is not None:
            record = choose_candidate(outcome, request.chosen_date)
        elif request.manual_date is not None:
            if outcome.state == "awaiting_user_choice":
                outcome = reject_candidates(outcome)
            record = enter_manual_date(outcome, request.manual_date, request.product_name)
        elif outcome.state == "auto_resolved" and outcome.record is not None:
            record = outcome.record
        else:
            return ConfirmLabelResult(status="invalid_choice", error="No expiry date was chosen or entered")
    except ValueError as exc:
        return ConfirmLabelResult(status="invalid_choice", error=str(exc))

    item = add_item(
        name=record.product_name,
        expiry_date=record.expiry_date,
        purchase_date=request.today or date.today(),
    )
    return ConfirmLabelResult(status="saved", record=record, item=item)

"""Label scan workflow orchestration."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from freshkeeper.label.label_parser import parse_label_text
from freshkeeper.label.ocr_helpers import OCR_ROTATIONS
from freshkeeper.runtime.label_pipeline import (
    InvalidLabelImage,
    OCRServiceUnavailable,
    call_ocr_service,
    save_ocr_text,
)
from freshkeeper.runtime.logging import get_logger
from freshkeeper.runtime.pantry_storage import add_item
from freshkeeper.runtime.scan_settings import load_scan_settings

if TYPE_CHECKING:
    from freshkeeper.domain.label import LabelScanOutcome
    from freshkeeper.domain.pantry import PantryItem
    from freshkeeper.label.settings import ScanSettings

logger = get_logger(__name__)

ScanStatus = Literal[
    "file_not_found",
    "invalid_image",
    "ocr_unavailable",
    "needs_manual_entry",
    "auto_resolved",
    "awaiting_user_choice",
]


@dataclass(frozen=True)
class LabelScanRequest:
    """Inputs for scanning one label photo."""

    image_path: Path
    ocr_url: str
    save: bool = True
    today: date | None = None
    rotations: Sequence[float] = OCR_ROTATIONS
    settings: ScanSettings | None = None


@dataclass(frozen=True)
class LabelTextRequest:
    """Inputs for parsing OCR text that was produced elsewhere."""

    text: str
    save: bool = True
    today: date | None = None
    settings: ScanSettings | None = None


@dataclass(frozen=True)
class LabelScanResult:
    """Outcome from label scan workflow."""

    status: ScanStatus
    outcome: LabelScanOutcome | None = None
    item: PantryItem | None = None
    ocr_text_path: Path | None = None
    error: str | None = None


def run_label_text(request: LabelTextRequest) -> LabelScanResult:
    """Parse label text; a single unambiguous date is stored right away."""
    today = request.today or date.today()
    settings = request.settings or load_scan_settings()

    outcome = parse_label_text(request.text, today=today, settings=settings)
    logger.info(
        "Label parsed: %s, product=%r, %d candidate(s)",
        outcome.state,
        outcome.product_name,
        len(outcome.candidates),
    )

    item = None
    if outcome.state == "auto_resolved" and request.save:
        assert outcome.record is not None
        item = add_item(
            name=outcome.record.product_name,
            expiry_date=outcome.record.expiry_date,
            purchase_date=today,
        )

    return LabelScanResult(status=outcome.state, outcome=outcome, item=item)


def run_label_scan(request: LabelScanRequest) -> LabelScanResult:
    """Run scan flow: multi-rotation OCR -> parse -> store if auto-resolved."""
    if not request.image_path.exists():
        return LabelScanResult(
            status="file_not_found",
            error=f"Label image not found: {request.image_path}",
        )

    try:
        text = call_ocr_service(
            request.image_path.read_bytes(),
            request.image_path.name,
            request.ocr_url,
            rotations=request.rotations,
        )
    except InvalidLabelImage:
        return LabelScanResult(
            status="invalid_image",
            error=f"Not a readable image: {request.image_path}",
        )
    except OCRServiceUnavailable as exc:
        return LabelScanResult(
            status="ocr_unavailable",
            error=str(exc),
        )

    ocr_text_path = save_ocr_text(text, request.image_path)
    result = run_label_text(
        LabelTextRequest(
            text=text,
            save=request.save,
            today=request.today,
            settings=request.settings,
        )
    )
    return LabelScanResult(
        status=result.status,
        outcome=result.outcome,
        item=result.item,
        ocr_text_path=ocr_text_path,
    )

"""Parse merged label OCR text into a scan outcome."""

from collections.abc import Iterable
from datetime import date

from freshkeeper.domain.label import LabelScanOutcome

from .candidates import collect_candidates
from .date_patterns import find_date_matches
from .disambiguation import resolve_candidates
from .product_name import extract_product_name
from .settings import DEFAULT_SCAN_SETTINGS, ScanSettings


def merge_ocr_passes(texts: Iterable[str]) -> str:
    """Concatenate OCR outputs from several image rotations into one blob."""
    return "\n".join(text for text in texts if text)


def parse_label_text(
    raw_text: str,
    today: date | None = None,
    settings: ScanSettings = DEFAULT_SCAN_SETTINGS,
) -> LabelScanOutcome:
    """
    Extract expiry date candidates and a product name from label OCR text.

    Args:
        raw_text: OCR text, possibly several rotation passes joined together
        today: Reference date for century expansion and recency filtering
        settings: Parsing tunables

    Returns:
        LabelScanOutcome in one of three states:
        needs_manual_entry, auto_resolved, awaiting_user_choice
    """
    if today is None:
        today = date.today()

    matches = find_date_matches(raw_text)
    candidates = collect_candidates(matches, today, settings)
    product_name = extract_product_name(raw_text)
    return resolve_candidates(candidates, product_name)

"""Label scanning: date extraction, disambiguation, product lookup."""

from .disambiguation import (
    annotate_candidates,
    choose_candidate,
    enter_manual_date,
    reject_candidates,
    resolve_candidates,
)
from .expiry_status import classify_expiry, days_until
from .label_parser import merge_ocr_passes, parse_label_text
from .product_name import PLACEHOLDER_PRODUCT_NAME, extract_product_name

__all__ = [
    "PLACEHOLDER_PRODUCT_NAME",
    "annotate_candidates",
    "choose_candidate",
    "classify_expiry",
    "days_until",
    "enter_manual_date",
    "extract_product_name",
    "merge_ocr_passes",
    "parse_label_text",
    "reject_candidates",
    "resolve_candidates",
]

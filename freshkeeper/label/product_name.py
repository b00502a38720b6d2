"""Best-effort product name extraction from label OCR text."""

import re

from .date_patterns import strip_date_patterns

PLACEHOLDER_PRODUCT_NAME = "Scanned Product"

NOISE_TOKENS = re.compile(r"\b(?:barcode|batch|lot|net\s+weight|ingredients)\b", re.IGNORECASE)
PURE_NUMBER = re.compile(r"^\d+$")

MIN_NAME_LENGTH = 4
MAX_NAME_LENGTH = 49


def _is_name_candidate(line: str) -> bool:
    if not MIN_NAME_LENGTH <= len(line) <= MAX_NAME_LENGTH:
        return False
    return PURE_NUMBER.match(line) is None


def extract_product_name(text: str) -> str:
    """
    Pick the first line that still looks like a name once dates and noise are gone.

    Example: "EXP: 15/08/2025\\nBATCH 22\\nFresh Milk 500ml" -> "Fresh Milk 500ml"
    """
    cleaned = NOISE_TOKENS.sub("", strip_date_patterns(text))
    for line in cleaned.split("\n"):
        line = line.strip()
        if _is_name_candidate(line):
            return line
    return PLACEHOLDER_PRODUCT_NAME

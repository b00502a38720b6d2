"""Runtime helpers for the label OCR pipeline (non-HTTP-server)."""

import time
from collections.abc import Sequence
from pathlib import Path

import httpx

from freshkeeper.label.ocr_helpers import (
    OCR_ROTATIONS,
    ocr_text_from_result,
    preprocess_label_image,
    rotate_image_bytes,
)
from freshkeeper.runtime.logging import get_logger
from freshkeeper.runtime.paths import get_paths

logger = get_logger(__name__)

OCR_TIMEOUT_SECONDS = 60.0


class OCRServiceUnavailable(RuntimeError):
    """Raised when the OCR service cannot be reached or returns an error."""


class InvalidLabelImage(ValueError):
    """Raised when uploaded bytes cannot be decoded as an image."""


def prepare_rotations(image_bytes: bytes, rotations: Sequence[float] = OCR_ROTATIONS) -> list[bytes]:
    """Preprocess once, then produce one image per rotation angle."""
    try:
        preprocessed = preprocess_label_image(image_bytes)
    except OSError as e:
        # PIL.UnidentifiedImageError is an OSError subclass
        raise InvalidLabelImage(f"Not a readable image: {e}") from e
    return [rotate_image_bytes(preprocessed, angle) for angle in rotations]


def ocr_endpoint(ocr_url: str) -> str:
    """Full URL of the OCR route for a service base URL."""
    return f"{ocr_url.rstrip('/')}/ocr"


def text_from_ocr_response(response: httpx.Response, angle: float) -> str:
    """
    Check one OCR reply and extract its text.

    Raises:
        OCRServiceUnavailable: non-200 reply
    """
    if response.status_code != 200:
        # Body may echo label text; keep it out of INFO logs.
        logger.error("OCR service error at rotation %s: %s", angle, response.status_code)
        logger.debug("OCR error body: %s", response.text)
        raise OCRServiceUnavailable(f"OCR service error: {response.status_code}")
    return ocr_text_from_result(response.json())


def call_ocr_service(
    image_bytes: bytes,
    filename: str,
    ocr_url: str,
    rotations: Sequence[float] = OCR_ROTATIONS,
    client: httpx.Client | None = None,
) -> str:
    """
    Run OCR over every rotation of a label photo and merge the texts.

    Returns:
        Concatenated OCR text, one block per rotation pass.

    Raises:
        InvalidLabelImage: image_bytes is not a decodable image
        OCRServiceUnavailable: connection failure or non-200 reply
    """
    endpoint = ocr_endpoint(ocr_url)
    logger.info("Sending label %s to OCR service at %s (%d passes)", filename, endpoint, len(rotations))

    payloads = prepare_rotations(image_bytes, rotations)
    owns_client = client is None
    http = client if client is not None else httpx.Client(timeout=OCR_TIMEOUT_SECONDS)
    texts: list[str] = []
    try:
        start_time = time.time()
        for angle, payload in zip(rotations, payloads):
            response = http.post(endpoint, files={"file": (filename, payload, "image/png")})
            texts.append(text_from_ocr_response(response, angle))
        logger.info("OCR passes finished in %.2f seconds", time.time() - start_time)
    except httpx.RequestError as e:
        logger.error("Failed to connect to OCR service: %s", e)
        raise OCRServiceUnavailable(f"Failed to connect to OCR service: {e}") from e
    finally:
        if owns_client:
            http.close()

    return "\n".join(texts)


def save_ocr_text(text: str, image_path: Path) -> Path:
    """Save merged OCR text next to the other scan artifacts for debugging."""
    out_dir = get_paths().labels_ocr_text
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / f"{image_path.stem}.txt"
    out_path.write_text(text, encoding="utf-8")
    logger.debug("OCR text saved to: %s", out_path)
    return out_path

"""Tests for label image preprocessing and OCR payload helpers."""

from __future__ import annotations

import io

from PIL import Image

from freshkeeper.label.ocr_helpers import (
    CONTRAST_PUSH,
    ocr_text_from_result,
    preprocess_label_image,
    rotate_image_bytes,
)


def _bbox(x0: int, y0: int, x1: int, y1: int) -> list[list[int]]:
    return [[x0, y0], [x1, y0], [x1, y1], [x0, y1]]


def _png(size: tuple[int, int], color: tuple[int, int, int] = (100, 150, 200)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def test_preprocess_scales_down_and_converts_to_grayscale() -> None:
    processed = Image.open(io.BytesIO(preprocess_label_image(_png((3000, 1500)))))

    assert processed.mode == "L"
    assert processed.size == (2000, 1000)


def test_preprocess_keeps_small_images_at_their_size() -> None:
    processed = Image.open(io.BytesIO(preprocess_label_image(_png((640, 480)))))

    assert processed.size == (640, 480)


def test_preprocess_pushes_pixels_away_from_mid_gray() -> None:
    dark = Image.open(io.BytesIO(preprocess_label_image(_png((10, 10), (60, 60, 60)))))
    light = Image.open(io.BytesIO(preprocess_label_image(_png((10, 10), (200, 200, 200)))))

    assert dark.getpixel((0, 0)) == 60 - CONTRAST_PUSH
    assert light.getpixel((0, 0)) == 200 + CONTRAST_PUSH


def test_rotate_zero_returns_input_unchanged() -> None:
    original = _png((20, 10))

    assert rotate_image_bytes(original, 0) is original


def test_rotate_keeps_size_and_fills_corners_white() -> None:
    gray = preprocess_label_image(_png((40, 40), (0, 0, 0)))

    rotated = Image.open(io.BytesIO(rotate_image_bytes(gray, 10)))

    assert rotated.size == (40, 40)
    assert rotated.getpixel((0, 0)) == 255


def test_ocr_text_groups_detections_into_lines() -> None:
    raw_result = {
        "status": "success",
        "detections": [
            [_bbox(300, 100, 420, 130), ["500ml", 0.97]],
            [_bbox(20, 100, 280, 130), ["Fresh Milk", 0.99]],
            [_bbox(20, 200, 300, 230), ["EXP: 15/08/2025", 0.93]],
        ],
    }

    assert ocr_text_from_result(raw_result) == "Fresh Milk 500ml\nEXP: 15/08/2025"


def test_ocr_text_drops_low_confidence_and_short_detections() -> None:
    raw_result = {
        "detections": [
            [_bbox(20, 10, 200, 40), ["Greek Yogurt", 0.95]],
            [_bbox(20, 60, 200, 90), ["B3st B4fore", 0.2]],
            [_bbox(20, 110, 40, 140), ["x", 0.99]],
        ],
    }

    assert ocr_text_from_result(raw_result) == "Greek Yogurt"


def test_ocr_text_from_empty_result() -> None:
    assert ocr_text_from_result({"detections": []}) == ""
    assert ocr_text_from_result({}) == ""

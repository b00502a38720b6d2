"""Pure image and OCR-payload helpers for label scanning."""

import io
from typing import Any

MAX_IMAGE_DIMENSION = 2000  # Scale down if either side exceeds this
CONTRAST_PUSH = 30  # Levels added/removed around mid-gray
OCR_ROTATIONS = (0, -5, 5, -10, 10)  # Degrees; labels are often photographed slightly askew

MIN_DETECTION_CONFIDENCE = 0.5
MIN_TEXT_LENGTH = 2


def _contrast_lut() -> list[int]:
    return [max(0, v - CONTRAST_PUSH) if v < 128 else min(255, v + CONTRAST_PUSH) for v in range(256)]


def preprocess_label_image(image_bytes: bytes, max_dimension: int = MAX_IMAGE_DIMENSION) -> bytes:
    """
    Prepare a label photo for OCR.

    Applies EXIF orientation, scales down so neither side exceeds
    max_dimension, converts to grayscale and pushes pixels away from
    mid-gray to sharpen printed digits.

    Returns:
        PNG image bytes
    """
    from PIL import Image, ImageOps

    img = Image.open(io.BytesIO(image_bytes))
    img = ImageOps.exif_transpose(img)

    width, height = img.size
    scale = min(max_dimension / width, max_dimension / height, 1.0)
    if scale < 1.0:
        new_size = (max(1, int(width * scale)), max(1, int(height * scale)))
        img = img.resize(new_size, Image.Resampling.LANCZOS)

    gray = img.convert("L").point(_contrast_lut())

    buffer = io.BytesIO()
    gray.save(buffer, format="PNG")
    return buffer.getvalue()


def rotate_image_bytes(image_bytes: bytes, angle: float) -> bytes:
    """Rotate an image around its centre, filling the corners with white."""
    if angle == 0:
        return image_bytes

    from PIL import Image

    img = Image.open(io.BytesIO(image_bytes))
    fill: int | tuple[int, ...] = 255 if img.mode == "L" else (255,) * len(img.getbands())
    # PIL rotates counter-clockwise for positive angles
    rotated = img.rotate(angle, resample=Image.Resampling.BICUBIC, fillcolor=fill)

    buffer = io.BytesIO()
    rotated.save(buffer, format="PNG")
    return buffer.getvalue()


def _group_into_lines(detections: list[dict[str, Any]]) -> list[list[dict[str, Any]]]:
    """Group detections whose vertical spans overlap into lines, top to bottom."""
    lines: list[list[dict[str, Any]]] = []
    for det in sorted(detections, key=lambda d: (d["center_y"], d["min_x"])):
        if lines:
            last = lines[-1]
            line_min = min(d["y_min"] for d in last)
            line_max = max(d["y_max"] for d in last)
            if line_min <= det["center_y"] <= line_max:
                last.append(det)
                continue
        lines.append([det])

    for line in lines:
        line.sort(key=lambda d: d["min_x"])
    return lines


def ocr_text_from_result(raw_result: dict[str, Any]) -> str:
    """
    Convert an OCR service payload into newline-separated text lines.

    The payload carries ``detections`` as ``[bbox, [text, confidence]]`` where
    bbox is four ``[x, y]`` points. Low-confidence and very short detections
    are dropped.
    """
    detection_data: list[dict[str, Any]] = []
    for detection in raw_result.get("detections", []):
        bbox, (text, confidence) = detection
        if confidence < MIN_DETECTION_CONFIDENCE:
            continue
        if len(text.strip()) < MIN_TEXT_LENGTH:
            continue

        y_coords = [point[1] for point in bbox]
        detection_data.append(
            {
                "text": text.strip(),
                "center_y": sum(y_coords) / len(y_coords),
                "y_min": min(y_coords),
                "y_max": max(y_coords),
                "min_x": min(point[0] for point in bbox),
            }
        )

    lines = _group_into_lines(detection_data)
    return "\n".join(" ".join(det["text"] for det in line) for line in lines)

"""FastAPI server for label scans and pantry management."""

import os
import time
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import date, datetime
from pathlib import Path
from typing import Any

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware

from freshkeeper.application.labels.scan import LabelTextRequest, run_label_text
from freshkeeper.application.pantry.barcode import BarcodeLookupRequest, run_barcode_lookup
from freshkeeper.application.pantry.inventory import (
    AddItemRequest,
    PantryListing,
    run_add_item,
    run_delete_item,
    run_discounted_offers,
    run_expiry_alerts,
    run_list_pantry,
    run_mark_consumed,
    run_toggle_discount,
)
from freshkeeper.domain.label import LabelScanOutcome
from freshkeeper.label.disambiguation import annotate_candidates
from freshkeeper.label.ocr_helpers import OCR_ROTATIONS
from freshkeeper.runtime.label_pipeline import (
    OCR_TIMEOUT_SECONDS,
    InvalidLabelImage,
    OCRServiceUnavailable,
    ocr_endpoint,
    prepare_rotations,
    text_from_ocr_response,
)
from freshkeeper.runtime.logging import get_logger
from freshkeeper.runtime.paths import get_paths
from freshkeeper.runtime.pantry_storage import item_to_dict
from freshkeeper.runtime.scan_settings import load_scan_settings

logger = get_logger(__name__)

OCR_SERVICE_URL = os.environ.get("OCR_SERVICE_URL", "http://localhost:8001")


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"status": "error", "message": message}, status_code=status_code)


def _parse_date(value: Any, field_name: str) -> date:
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be an ISO date string")
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValueError(f"{field_name} is not a valid ISO date: {value!r}") from e


def _today_from(value: Any) -> date:
    return _parse_date(value, "today") if value else date.today()


def outcome_to_dict(outcome: LabelScanOutcome, today: date) -> dict[str, Any]:
    """Serialize a scan outcome, annotating candidates with their status."""
    settings = load_scan_settings()
    return {
        "state": outcome.state,
        "product_name": outcome.product_name,
        "expiry_date": outcome.record.expiry_date.isoformat() if outcome.record else None,
        "candidates": [
            {
                "date": choice.candidate.resolved_date.isoformat(),
                "raw_match": choice.candidate.raw_match,
                "source": choice.candidate.source_kind,
                "days_left": choice.days_left,
                "status": choice.status,
            }
            for choice in annotate_candidates(outcome.candidates, today, settings.use_soon_days)
        ],
    }


def listing_to_dict(listing: PantryListing) -> dict[str, Any]:
    return {
        "items": [
            {**item_to_dict(row.item), "days_left": row.days_left, "status": row.status}
            for row in listing.rows
        ]
    }


async def _ocr_label(contents: bytes, filename: str) -> str:
    """Run every rotation through the OCR service and merge the texts."""
    endpoint = ocr_endpoint(OCR_SERVICE_URL)
    payloads = prepare_rotations(contents, OCR_ROTATIONS)
    texts: list[str] = []
    try:
        async with httpx.AsyncClient(timeout=OCR_TIMEOUT_SECONDS) as client:
            for angle, payload in zip(OCR_ROTATIONS, payloads):
                response = await client.post(endpoint, files={"file": (filename, payload, "image/png")})
                texts.append(text_from_ocr_response(response, angle))
    except httpx.RequestError as e:
        logger.error("OCR service unavailable: %s", e)
        raise OCRServiceUnavailable(f"Failed to connect to OCR service: {e}") from e
    return "\n".join(texts)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and latency of every request."""

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        content_type = request.headers.get("content-type", "")
        logger.debug("%s %s Content-Type: %s", request.method, request.url.path, content_type)

        start_time = time.time()
        response = await call_next(request)
        logger.info(
            "%s %s -> %d (%.0f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.time() - start_time) * 1000,
        )
        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create data directories on startup."""
    get_paths().ensure_data_directories()
    yield


app = FastAPI(title="FreshKeeper", lifespan=lifespan)
app.add_middleware(RequestLoggingMiddleware)


@app.post("/scan")
async def scan_label(request: Request) -> JSONResponse:
    """Receive a label photo, OCR it, and auto-save a single unambiguous date."""
    form = await request.form()

    file = None
    for key, value in form.items():
        if hasattr(value, "read"):
            file = value
            break

    if not file:
        return _error("No file found in request", 400)

    try:
        today = _today_from(request.query_params.get("today"))
    except ValueError as e:
        return _error(str(e), 400)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    file_filename = getattr(file, "filename", None)
    ext = Path(file_filename).suffix if file_filename else ".jpg"
    filename = f"label_{timestamp}{ext}"
    labels_dir = get_paths().labels
    labels_dir.mkdir(parents=True, exist_ok=True)
    contents = await file.read()
    (labels_dir / filename).write_bytes(contents)

    try:
        text = await _ocr_label(contents, filename)
    except InvalidLabelImage:
        return _error("Uploaded file is not a readable image", 400)
    except OCRServiceUnavailable as e:
        return _error(str(e), 503)

    result = run_label_text(LabelTextRequest(text=text, today=today))
    assert result.outcome is not None
    body = {"status": "success", "image_filename": filename, **outcome_to_dict(result.outcome, today)}
    if result.item is not None:
        body["item"] = item_to_dict(result.item)
    return JSONResponse(body)


@app.post("/scan/text")
async def scan_text(request: Request) -> JSONResponse:
    """Parse OCR text supplied by the client; nothing is stored."""
    try:
        payload = await request.json()
    except ValueError:
        return _error("Request body must be JSON", 400)

    text = payload.get("text") if isinstance(payload, dict) else None
    if not isinstance(text, str):
        return _error("Field 'text' is required", 400)

    try:
        today = _today_from(payload.get("today"))
    except ValueError as e:
        return _error(str(e), 400)

    result = run_label_text(LabelTextRequest(text=text, save=False, today=today))
    assert result.outcome is not None
    return JSONResponse({"status": "success", **outcome_to_dict(result.outcome, today)})


@app.post("/items")
async def create_item(request: Request) -> JSONResponse:
    """Add an item from manual entry, a chosen scan candidate, or a barcode prefill."""
    try:
        payload = await request.json()
    except ValueError:
        return _error("Request body must be JSON", 400)
    if not isinstance(payload, dict):
        return _error("Request body must be a JSON object", 400)

    try:
        expiry_raw = payload.get("expiry_date")
        expiry_date = _parse_date(expiry_raw, "expiry_date") if expiry_raw else None
        purchase_raw = payload.get("purchase_date")
        purchase_date = _parse_date(purchase_raw, "purchase_date") if purchase_raw else None
        today = _today_from(payload.get("today"))
    except ValueError as e:
        return _error(str(e), 400)

    name = payload.get("name", "")
    if not isinstance(name, str):
        return _error("name must be a string", 400)
    barcode = payload.get("barcode")
    if barcode is not None and not isinstance(barcode, str):
        return _error("barcode must be a string", 400)

    result = run_add_item(
        AddItemRequest(
            name=name,
            expiry_date=expiry_date,
            purchase_date=purchase_date,
            barcode=barcode,
        ),
        today=today,
    )
    if result.status == "invalid":
        return JSONResponse({"status": "error", "errors": result.errors}, status_code=400)

    assert result.item is not None
    return JSONResponse({"status": "success", "item": item_to_dict(result.item)}, status_code=201)


@app.get("/items")
async def list_items(today: str | None = None) -> JSONResponse:
    """Pantry listing with days left and status."""
    try:
        ref = _today_from(today)
    except ValueError as e:
        return _error(str(e), 400)
    return JSONResponse(listing_to_dict(run_list_pantry(today=ref)))


@app.get("/alerts")
async def list_alerts(today: str | None = None) -> JSONResponse:
    """Items that are expired or need using soon."""
    try:
        ref = _today_from(today)
    except ValueError as e:
        return _error(str(e), 400)
    return JSONResponse(listing_to_dict(run_expiry_alerts(today=ref)))


@app.post("/items/{item_id}/consume")
async def consume_item(item_id: str) -> JSONResponse:
    result = run_mark_consumed(item_id)
    if result.status == "not_found":
        return _error(result.error or "Item not found", 404)
    assert result.item is not None
    return JSONResponse({"status": "success", "item": item_to_dict(result.item)})


@app.post("/items/{item_id}/discount")
async def toggle_discount(item_id: str, today: str | None = None) -> JSONResponse:
    try:
        ref = _today_from(today)
    except ValueError as e:
        return _error(str(e), 400)

    result = run_toggle_discount(item_id, today=ref)
    if result.status == "not_found":
        return _error(result.error or "Item not found", 404)
    if result.status == "not_eligible":
        return _error(result.error or "Item not eligible for discount", 400)
    assert result.item is not None
    return JSONResponse({"status": "success", "item": item_to_dict(result.item)})


@app.delete("/items/{item_id}")
async def delete_item(item_id: str) -> JSONResponse:
    result = run_delete_item(item_id)
    if result.status == "not_found":
        return _error(result.error or "Item not found", 404)
    assert result.item is not None
    return JSONResponse({"status": "success", "item": item_to_dict(result.item)})


@app.get("/offers")
async def list_offers(today: str | None = None, limit: int = 10) -> JSONResponse:
    """Discounted items that have not expired, biggest discount first."""
    try:
        ref = _today_from(today)
    except ValueError as e:
        return _error(str(e), 400)
    if limit < 1:
        return _error("limit must be at least 1", 400)
    return JSONResponse(listing_to_dict(run_discounted_offers(today=ref, limit=limit)))


@app.get("/barcode/{code}")
async def barcode_lookup(code: str, nutrition: bool = True, today: str | None = None) -> JSONResponse:
    """Product prefill for a scanned barcode."""
    try:
        ref = _today_from(today)
    except ValueError as e:
        return _error(str(e), 400)

    result = run_barcode_lookup(BarcodeLookupRequest(barcode=code, today=ref, with_nutrition=nutrition))
    if result.status == "invalid":
        return _error(result.error or "Invalid barcode", 400)

    assert result.product is not None and result.expiry_date is not None
    return JSONResponse(
        {
            "status": result.status,
            "product": asdict(result.product),
            "expiry_date": result.expiry_date.isoformat(),
            "nutrition": asdict(result.nutrition) if result.nutrition is not None else None,
        }
    )


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)

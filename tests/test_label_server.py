"""Tests for the FastAPI label/pantry server."""

from __future__ import annotations

import io
from datetime import date

import httpx
import pytest
from _pytest.monkeypatch import MonkeyPatch
from fastapi.testclient import TestClient
from PIL import Image
from freshkeeper.runtime import label_server
from freshkeeper.runtime.label_pipeline import OCRServiceUnavailable
from freshkeeper.runtime.pantry_storage import add_item, get_item, load_items
from freshkeeper.runtime.paths import ProjectPaths


@pytest.fixture
def client() -> TestClient:
    return TestClient(label_server.app)


def _fake_ocr(text: str):
    async def fake(contents: bytes, filename: str) -> str:
        return text

    return fake


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_scan_auto_resolves_and_stores(client: TestClient, monkeypatch: MonkeyPatch, project_home: ProjectPaths) -> None:
    monkeypatch.setattr(label_server, "_ocr_label", _fake_ocr("EXP: 15/08/2025\nBATCH 22\nFresh Milk 500ml"))

    response = client.post(
        "/scan",
        params={"today": "2025-08-01"},
        files={"file": ("milk.jpg", b"fake-jpeg", "image/jpeg")},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["state"] == "auto_resolved"
    assert body["product_name"] == "Fresh Milk 500ml"
    assert body["expiry_date"] == "2025-08-15"
    assert body["candidates"][0]["status"] == "safe"
    assert body["item"]["name"] == "Fresh Milk 500ml"
    assert (project_home.labels / body["image_filename"]).read_bytes() == b"fake-jpeg"
    assert len(load_items()) == 1


def test_scan_with_several_dates_returns_choices(client: TestClient, monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setattr(label_server, "_ocr_label", _fake_ocr("Yogurt\nEXP 12/06/2024\n20/06/2024"))

    response = client.post(
        "/scan",
        params={"today": "2024-06-10"},
        files={"file": ("yogurt.png", b"png", "image/png")},
    )

    body = response.json()
    assert body["state"] == "awaiting_user_choice"
    assert [(c["date"], c["days_left"], c["status"]) for c in body["candidates"]] == [
        ("2024-06-12", 2, "use-soon"),
        ("2024-06-20", 10, "safe"),
    ]
    assert "item" not in body
    assert load_items() == []


def test_scan_without_file_is_rejected(client: TestClient) -> None:
    response = client.post("/scan", data={"note": "no file"})

    assert response.status_code == 400


def test_scan_reports_ocr_outage(client: TestClient, monkeypatch: MonkeyPatch) -> None:
    async def down(contents: bytes, filename: str) -> str:
        raise OCRServiceUnavailable("Failed to connect to OCR service: refused")

    monkeypatch.setattr(label_server, "_ocr_label", down)

    response = client.post("/scan", files={"file": ("milk.jpg", b"x", "image/jpeg")})

    assert response.status_code == 503
    assert response.json()["status"] == "error"


def test_scan_rejects_non_image_upload(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setattr(label_server, "OCR_SERVICE_URL", "http://127.0.0.1:9")
    client = TestClient(label_server.app, raise_server_exceptions=False)

    response = client.post("/scan", files={"file": ("label.jpg", b"not an image", "image/jpeg")})

    assert response.status_code == 400
    assert response.json() == {"status": "error", "message": "Uploaded file is not a readable image"}
    assert load_items() == []


def test_scan_posts_every_rotation_to_normalized_ocr_url(client: TestClient, monkeypatch: MonkeyPatch) -> None:
    urls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        urls.append(str(request.url))
        return httpx.Response(200, json={"detections": [[[[0, 0], [90, 0], [90, 20], [0, 20]], ["EXP: 15/08/2025", 0.9]]]})

    real_async_client = httpx.AsyncClient
    monkeypatch.setattr(label_server, "OCR_SERVICE_URL", "http://ocr.local/")
    monkeypatch.setattr(
        label_server.httpx,
        "AsyncClient",
        lambda **kwargs: real_async_client(transport=httpx.MockTransport(handler), **kwargs),
    )
    buffer = io.BytesIO()
    Image.new("RGB", (120, 60), (240, 240, 240)).save(buffer, format="PNG")

    response = client.post(
        "/scan",
        params={"today": "2025-08-01"},
        files={"file": ("milk.png", buffer.getvalue(), "image/png")},
    )

    assert response.status_code == 200
    assert response.json()["expiry_date"] == "2025-08-15"
    assert urls == ["http://ocr.local/ocr"] * len(label_server.OCR_ROTATIONS)


def test_scan_reports_ocr_error_status(client: TestClient, monkeypatch: MonkeyPatch) -> None:
    real_async_client = httpx.AsyncClient
    monkeypatch.setattr(
        label_server.httpx,
        "AsyncClient",
        lambda **kwargs: real_async_client(
            transport=httpx.MockTransport(lambda request: httpx.Response(500, text="model not loaded")), **kwargs
        ),
    )
    buffer = io.BytesIO()
    Image.new("RGB", (120, 60), (240, 240, 240)).save(buffer, format="PNG")

    response = client.post("/scan", files={"file": ("milk.png", buffer.getvalue(), "image/png")})

    assert response.status_code == 503
    assert "500" in response.json()["message"]


def test_scan_text_never_stores(client: TestClient) -> None:
    response = client.post("/scan/text", json={"text": "EXP: 15/08/2025\nFresh Milk", "today": "2025-08-01"})

    assert response.status_code == 200
    assert response.json()["state"] == "auto_resolved"
    assert load_items() == []


def test_scan_text_requires_text(client: TestClient) -> None:
    assert client.post("/scan/text", json={"today": "2025-08-01"}).status_code == 400
    assert client.post("/scan/text", json={"text": "x", "today": "not-a-date"}).status_code == 400


def test_create_item_and_validation(client: TestClient) -> None:
    created = client.post(
        "/items",
        json={"name": "Greek Yogurt", "expiry_date": "2024-06-20", "today": "2024-06-10", "barcode": "8901030804538"},
    )
    invalid = client.post("/items", json={"name": "", "expiry_date": "2024-06-01", "today": "2024-06-10"})
    bad_date = client.post("/items", json={"name": "Milk", "expiry_date": "20/06/2024"})
    null_name = client.post("/items", json={"name": None, "expiry_date": "2030-01-01"})
    numeric_name = client.post("/items", json={"name": 123, "expiry_date": "2030-01-01"})
    numeric_barcode = client.post("/items", json={"name": "Milk", "expiry_date": "2030-01-01", "barcode": 8901030702024})

    assert created.status_code == 201
    assert created.json()["item"]["barcode"] == "8901030804538"
    assert invalid.status_code == 400
    assert set(invalid.json()["errors"]) == {"name", "expiry_date"}
    assert bad_date.status_code == 400
    assert null_name.status_code == 400
    assert null_name.json()["message"] == "name must be a string"
    assert numeric_name.status_code == 400
    assert numeric_barcode.status_code == 400
    assert [item.name for item in load_items()] == ["Greek Yogurt"]


def test_items_and_alerts_listing(client: TestClient) -> None:
    add_item("Rice", date(2025, 6, 1))
    add_item("Yogurt", date(2024, 6, 12))

    items = client.get("/items", params={"today": "2024-06-10"}).json()["items"]
    alerts = client.get("/alerts", params={"today": "2024-06-10"}).json()["items"]

    assert [(i["name"], i["status"]) for i in items] == [("Yogurt", "use-soon"), ("Rice", "safe")]
    assert [i["name"] for i in alerts] == ["Yogurt"]


def test_consume_item(client: TestClient) -> None:
    item = add_item("Yogurt", date(2024, 6, 12))

    response = client.post(f"/items/{item.id}/consume")

    assert response.status_code == 200
    assert get_item(item.id).consumed
    assert client.post("/items/missing/consume").status_code == 404


def test_discount_item(client: TestClient) -> None:
    near = add_item("Bread", date(2024, 6, 12))
    far = add_item("Rice", date(2025, 6, 1))

    applied = client.post(f"/items/{near.id}/discount", params={"today": "2024-06-10"})
    refused = client.post(f"/items/{far.id}/discount", params={"today": "2024-06-10"})

    assert applied.status_code == 200
    assert applied.json()["item"]["discount"] == 20
    assert refused.status_code == 400
    assert client.post("/items/missing/discount").status_code == 404


def test_barcode_lookup(client: TestClient) -> None:
    response = client.get("/barcode/8901030702024", params={"nutrition": "false", "today": "2024-06-10"})

    body = response.json()
    assert response.status_code == 200
    assert body["status"] == "found"
    assert body["product"]["name"] == "Fresh Milk"
    assert body["expiry_date"] == "2024-06-17"
    assert body["nutrition"] is None


def test_barcode_lookup_rejects_non_numeric(client: TestClient) -> None:
    assert client.get("/barcode/abc", params={"nutrition": "false"}).status_code == 400


def test_delete_item(client: TestClient) -> None:
    keep = add_item("Rice", date(2025, 6, 1))
    gone = add_item("Yogurt", date(2024, 6, 12))

    response = client.delete(f"/items/{gone.id}")

    assert response.status_code == 200
    assert response.json()["item"]["name"] == "Yogurt"
    assert [item.id for item in load_items()] == [keep.id]
    assert client.delete(f"/items/{gone.id}").status_code == 404


def test_offers_listing(client: TestClient) -> None:
    bread = add_item("Bread", date(2024, 6, 12))
    milk = add_item("Milk", date(2024, 6, 11))
    add_item("Rice", date(2025, 6, 1))
    for item in (bread, milk):
        client.post(f"/items/{item.id}/discount", params={"today": "2024-06-10"})

    offers = client.get("/offers", params={"today": "2024-06-10"}).json()["items"]
    later = client.get("/offers", params={"today": "2024-06-12"}).json()["items"]

    assert [(i["name"], i["discount"]) for i in offers] == [("Milk", 20), ("Bread", 20)]
    assert [i["name"] for i in later] == ["Bread"]
    assert len(client.get("/offers", params={"today": "2024-06-10", "limit": 1}).json()["items"]) == 1
    assert client.get("/offers", params={"limit": 0}).status_code == 400

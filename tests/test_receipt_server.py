"""Tests for the receipt rendering server."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from campusmeal.runtime.receipt_server import app


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_render_receipt(client) -> None:
    response = client.post("/receipt", json={"lines": ["Meal Receipt", "Price: $8.00"], "filename": "receipt-b1.pdf"})

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == 'attachment; filename="receipt-b1.pdf"'
    assert response.content.startswith(b"%PDF-1.4\n")
    assert b"(Price: $8.00) Tj" in response.content


def test_render_receipt_default_filename(client) -> None:
    response = client.post("/receipt", json={"lines": []})

    assert response.status_code == 200
    assert response.headers["content-disposition"] == 'attachment; filename="receipt.pdf"'


@pytest.mark.parametrize(
    "body",
    [
        {"lines": "not a list"},
        {"lines": ["ok", 3]},
        {"lines": ["ok"], "filename": "../etc/passwd.pdf"},
        {"lines": ["ok"], "filename": "receipt.txt"},
        ["not", "an", "object"],
    ],
)
def test_render_receipt_rejects_bad_input(client, body) -> None:
    response = client.post("/receipt", json=body)

    assert response.status_code == 422
    assert response.json()["status"] == "error"


def test_render_receipt_rejects_invalid_json(client) -> None:
    response = client.post("/receipt", content=b"{", headers={"Content-Type": "application/json"})

    assert response.status_code == 422
    assert response.json()["message"] == "Request body must be a JSON object"


def test_render_payment_receipt(client) -> None:
    response = client.post(
        "/receipt/payment",
        json={
            "mealType": "DINNER",
            "paymentMethod": "MOBILE_MONEY",
            "amountPaid": 10,
            "timestamp": "2025-03-01T19:05:30",
            "qrCode": "QR-9",
            "mobileMoneyNumber": "0712345678",
            "remainingBalance": 2,
        },
    )

    assert response.status_code == 200
    assert response.headers["content-disposition"] == 'attachment; filename="payment-20250301_190530.pdf"'
    assert b"(Meal: Dinner) Tj" in response.content
    assert b"(Mobile Money Number: 0712345678) Tj" in response.content
    assert b"(Remaining Balance: $2.00) Tj" in response.content


def test_render_payment_receipt_uses_configured_labels(client, tmp_path) -> None:
    (tmp_path / "campusmeal.toml").write_text('[[meals]]\ntype = "DINNER"\nlabel = "Supper"\nprice = "12"\n')

    response = client.post(
        "/receipt/payment",
        json={"mealType": "DINNER", "paymentMethod": "CASH", "amountPaid": 12, "timestamp": "2025-03-01T19:05:30"},
    )

    assert response.status_code == 200
    assert b"(Meal: Supper) Tj" in response.content


def test_render_payment_receipt_rejects_bad_schema(client) -> None:
    response = client.post("/receipt/payment", json={"mealType": "DINNER"})

    assert response.status_code == 422
    assert response.json()["message"] == "payment receipt: missing 'amountPaid'"

"""Shared pytest fixtures for campusmeal tests."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

import httpx
import pytest

from campusmeal.domain.models import MealBooking, Session, StudentProfile, User
from campusmeal.runtime import CampusApiClient, reset_settings

API_URL = "http://api.test"

Body = Any


class FakeApi:
    """In-memory stand-in for the REST API, served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, Body]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, body: Body = None, status: int = 200) -> None:
        self.routes[(method, path)] = (status, body)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"message": f"No route for {key[0]} {key[1]}"})
        status, body = self.routes[key]
        if callable(body):
            body = body(request)
        if isinstance(body, bytes):
            return httpx.Response(status, content=body)
        return httpx.Response(status, json=body)

    def client(self, token: str | None = "tok") -> CampusApiClient:
        return CampusApiClient(API_URL, token=token, transport=httpx.MockTransport(self))

    def paths(self) -> list[str]:
        return [f"{r.method} {r.url.path}" for r in self.requests]


def user_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "id": "u1",
        "fullName": "Ada Lovelace",
        "email": "ada@campus.edu",
        "phone": "0712345678",
        "role": "STUDENT",
        "created_at": "2025-01-10T08:00:00Z",
        "mealBalance": 12,
    }
    payload.update(overrides)
    return payload


def student_payload(**overrides: Any) -> dict[str, Any]:
    payload = {"id": "s1", "registrationNumber": "REG-001", "department": "CS", "balance": "20.00"}
    payload.update(overrides)
    return payload


def booking_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "id": "b1",
        "meal_type": "LUNCH",
        "status": "PAID",
        "price": 8,
        "created_at": "2025-03-01T12:30:00",
        "qr_code": "QR-123",
        "qr_expires_at": None,
    }
    payload.update(overrides)
    return payload


def meal_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "id": "m1",
        "meal_type": "LUNCH",
        "status": "ACTIVE",
        "price": "8.00",
        "user_id": "u1",
        "created_at": "2025-03-01T12:30:00Z",
    }
    payload.update(overrides)
    return payload


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Keep tests independent of the caller's environment and config files."""
    for name in (
        "CAMPUSMEAL_CONFIG",
        "CAMPUSMEAL_API_URL",
        "CAMPUSMEAL_TOKEN",
        "CAMPUSMEAL_USER_ID",
        "CAMPUSMEAL_TIMEOUT",
        "CAMPUSMEAL_OUTPUT_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def student_user() -> User:
    return User(
        id="u1",
        email="ada@campus.edu",
        role="STUDENT",
        full_name="Ada Lovelace",
        meal_balance=Decimal("12"),
    )


@pytest.fixture
def student_session(student_user: User) -> Session:
    profile = StudentProfile(id="s1", registration_number="REG-001", department="CS", balance=Decimal("20"))
    return Session(token="tok", user=student_user, student=profile)


@pytest.fixture
def admin_session() -> Session:
    admin = User(id="a1", email="admin@campus.edu", role="Admin", full_name="Grace Hopper")
    return Session(token="tok", user=admin)


@pytest.fixture
def lunch_booking() -> MealBooking:
    return MealBooking(
        id="b1",
        meal_type="LUNCH",
        status="PAID",
        price=Decimal("8"),
        created_at=datetime(2025, 3, 1, 12, 30),
        qr_code="QR-123",
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 1, 12, 45, tzinfo=timezone.utc)

"""Response schema parsing."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from conftest import booking_payload, meal_payload, student_payload, user_payload

from campusmeal.domain.models import MealCatalog, MealOption, MealType
from campusmeal.domain.parsing import (
    ResponseSchemaError,
    parse_booking,
    parse_booking_envelope,
    parse_booking_list,
    parse_decimal,
    parse_finance_metrics,
    parse_meal_page,
    parse_payment_confirmation,
    parse_payment_receipt,
    parse_student,
    parse_timestamp,
    parse_user_envelope,
    parse_user_page,
)


def test_parse_user_envelope() -> None:
    user = parse_user_envelope({"user": user_payload()})

    assert user.id == "u1"
    assert user.full_name == "Ada Lovelace"
    assert user.meal_balance == Decimal("12")
    assert user.created_at == datetime(2025, 1, 10, 8, 0, tzinfo=timezone.utc)
    assert user.is_student
    assert not user.is_admin


def test_bare_user_object_is_rejected() -> None:
    with pytest.raises(ResponseSchemaError, match="missing 'user'"):
        parse_user_envelope(user_payload())


def test_parse_student() -> None:
    student = parse_student(student_payload())

    assert student.registration_number == "REG-001"
    assert student.balance == Decimal("20.00")


def test_parse_booking_allows_null_price() -> None:
    booking = parse_booking(booking_payload(price=None, qr_code=None))

    assert booking.price is None
    assert booking.qr_code is None
    assert booking.created_at == datetime(2025, 3, 1, 12, 30)


def test_parse_booking_requires_price_key() -> None:
    payload = booking_payload()
    del payload["price"]

    with pytest.raises(ResponseSchemaError, match="price"):
        parse_booking(payload)


def test_parse_booking_rejects_alternate_field_names() -> None:
    payload = booking_payload()
    payload["createdAt"] = payload.pop("created_at")

    with pytest.raises(ResponseSchemaError, match="created_at"):
        parse_booking(payload)


def test_parse_booking_envelope_and_list() -> None:
    assert parse_booking_envelope({"booking": booking_payload()}).id == "b1"
    bookings = parse_booking_list([booking_payload(), booking_payload(id="b2")])
    assert [b.id for b in bookings] == ["b1", "b2"]

    with pytest.raises(ResponseSchemaError, match="expected a list"):
        parse_booking_list({"bookings": []})


def test_parse_payment_confirmation() -> None:
    confirmation = parse_payment_confirmation({"booking": booking_payload(), "remainingBalance": 12})

    assert confirmation.booking.qr_code == "QR-123"
    assert confirmation.remaining_balance == Decimal("12")
    assert parse_payment_confirmation({"booking": booking_payload()}).remaining_balance is None


def test_parse_user_page() -> None:
    page = parse_user_page({"users": [user_payload()], "meta": {"total": 31}}, page=2, limit=10)

    assert page.total == 31
    assert page.page == 2
    assert [u.id for u in page.items] == ["u1"]


@pytest.mark.parametrize("meta", [None, {}, {"total": -1}, {"total": "3"}, {"total": True}])
def test_parse_page_rejects_bad_meta(meta) -> None:
    with pytest.raises(ResponseSchemaError):
        parse_meal_page({"meals": [meal_payload()], "meta": meta}, page=1, limit=10)


def test_parse_meal_page_prices() -> None:
    page = parse_meal_page({"meals": [meal_payload(price=5)], "meta": {"total": 1}}, page=1, limit=10)

    assert page.items[0].price == Decimal("5")
    assert page.items[0].is_active


@pytest.mark.parametrize("value", ["abc", True, None, "NaN", "Infinity", [1]])
def test_parse_decimal_rejects_non_numbers(value) -> None:
    with pytest.raises(ResponseSchemaError):
        parse_decimal(value, "price")


def test_parse_decimal_accepts_numbers_and_strings() -> None:
    assert parse_decimal(8, "price") == Decimal("8")
    assert parse_decimal(" 8.50 ", "price") == Decimal("8.50")
    assert parse_decimal(0.1, "price") == Decimal("0.1")


def test_parse_timestamp() -> None:
    assert parse_timestamp("2025-03-01T12:30:00+03:00", "ts").utcoffset() == timedelta(hours=3)
    with pytest.raises(ResponseSchemaError):
        parse_timestamp("yesterday", "ts")
    with pytest.raises(ResponseSchemaError):
        parse_timestamp(1700000000, "ts")


def test_parse_finance_metrics() -> None:
    metrics = parse_finance_metrics({"totalRevenue": "1200.50", "walletLiability": 0})

    assert metrics.total_revenue == Decimal("1200.50")
    assert metrics.wallet_liability == Decimal("0")

    with pytest.raises(ResponseSchemaError, match="walletLiability"):
        parse_finance_metrics({"totalRevenue": 1})


def test_parse_payment_receipt_uses_catalog_label() -> None:
    catalog = MealCatalog((MealOption(MealType.LUNCH, "Midday Meal", Decimal("9")),))

    receipt = parse_payment_receipt(
        {
            "mealType": "lunch",
            "paymentMethod": "CASH",
            "amountPaid": 9,
            "timestamp": "2025-03-01T12:30:00Z",
        },
        catalog,
    )

    assert receipt.meal_type is MealType.LUNCH
    assert receipt.meal_label == "Midday Meal"
    assert receipt.qr_code is None
    assert receipt.remaining_balance is None


def test_parse_payment_receipt_rejects_unknown_meal() -> None:
    with pytest.raises(ResponseSchemaError, match="unknown mealType"):
        parse_payment_receipt(
            {"mealType": "BRUNCH", "paymentMethod": "CASH", "amountPaid": 1, "timestamp": "2025-03-01T12:30:00"},
            MealCatalog(),
        )

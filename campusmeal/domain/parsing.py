"""Parsing of REST API payloads into domain models.

Each endpoint has exactly one accepted response shape. Payloads that do not
match it raise ResponseSchemaError rather than being coerced through
alternate field names.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, TypeVar

from campusmeal.domain.models import (
    FinanceMetrics,
    Meal,
    MealBooking,
    MealCatalog,
    MealType,
    Page,
    PaymentConfirmation,
    PaymentReceipt,
    StudentProfile,
    User,
)

T = TypeVar("T")


class ResponseSchemaError(ValueError):
    """Raised when an API payload does not match its documented schema."""

    def __init__(self, message: str, payload: object = None) -> None:
        super().__init__(message)
        self.payload = payload


def _require_mapping(payload: object, what: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ResponseSchemaError(f"{what}: expected an object, got {type(payload).__name__}", payload)
    return payload


def _require_list(payload: object, what: str) -> list[Any]:
    if not isinstance(payload, list):
        raise ResponseSchemaError(f"{what}: expected a list, got {type(payload).__name__}", payload)
    return payload


def _require_str(payload: dict[str, Any], key: str, what: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value:
        raise ResponseSchemaError(f"{what}: missing or invalid string field '{key}'", payload)
    return value


def _optional_str(payload: dict[str, Any], key: str, what: str) -> str | None:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ResponseSchemaError(f"{what}: field '{key}' must be a string or null", payload)
    return value


def parse_decimal(value: object, field_name: str) -> Decimal:
    """Parse a JSON number or numeric string into a Decimal."""
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ResponseSchemaError(f"'{field_name}' must be numeric, got {value!r}")
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ResponseSchemaError(f"'{field_name}' must be numeric, got {value!r}") from exc
    if not number.is_finite():
        raise ResponseSchemaError(f"'{field_name}' must be finite, got {value!r}")
    return number


def _optional_decimal(payload: dict[str, Any], key: str) -> Decimal | None:
    value = payload.get(key)
    if value is None:
        return None
    return parse_decimal(value, key)


def parse_timestamp(value: object, field_name: str) -> datetime:
    """Parse an ISO-8601 timestamp; a trailing ``Z`` is read as UTC."""
    if not isinstance(value, str):
        raise ResponseSchemaError(f"'{field_name}' must be an ISO-8601 string, got {value!r}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ResponseSchemaError(f"'{field_name}' is not ISO-8601: {value!r}") from exc


def _optional_timestamp(payload: dict[str, Any], key: str) -> datetime | None:
    value = payload.get(key)
    if value is None:
        return None
    return parse_timestamp(value, key)


def parse_user(payload: object) -> User:
    data = _require_mapping(payload, "user")
    return User(
        id=_require_str(data, "id", "user"),
        email=_require_str(data, "email", "user"),
        role=_require_str(data, "role", "user"),
        full_name=_optional_str(data, "fullName", "user"),
        phone=_optional_str(data, "phone", "user"),
        created_at=_optional_timestamp(data, "created_at"),
        meal_balance=_optional_decimal(data, "mealBalance"),
    )


def parse_user_envelope(payload: object) -> User:
    """Parse ``GET /user/{id}``: ``{"user": {...}}``."""
    data = _require_mapping(payload, "user response")
    if "user" not in data:
        raise ResponseSchemaError("user response: missing 'user'", payload)
    return parse_user(data["user"])


def parse_student(payload: object) -> StudentProfile:
    data = _require_mapping(payload, "student")
    return StudentProfile(
        id=_require_str(data, "id", "student"),
        registration_number=_optional_str(data, "registrationNumber", "student"),
        department=_optional_str(data, "department", "student"),
        balance=_optional_decimal(data, "balance"),
    )


def parse_booking(payload: object) -> MealBooking:
    data = _require_mapping(payload, "booking")
    if "price" not in data:
        raise ResponseSchemaError("booking: missing field 'price'", payload)
    if "created_at" not in data:
        raise ResponseSchemaError("booking: missing field 'created_at'", payload)
    return MealBooking(
        id=_require_str(data, "id", "booking"),
        meal_type=_require_str(data, "meal_type", "booking"),
        status=_require_str(data, "status", "booking"),
        price=_optional_decimal(data, "price"),
        created_at=parse_timestamp(data["created_at"], "created_at"),
        qr_code=_optional_str(data, "qr_code", "booking"),
        qr_expires_at=_optional_timestamp(data, "qr_expires_at"),
    )


def parse_booking_envelope(payload: object) -> MealBooking:
    """Parse ``POST /booking``: ``{"booking": {...}}``."""
    data = _require_mapping(payload, "booking response")
    if "booking" not in data:
        raise ResponseSchemaError("booking response: missing 'booking'", payload)
    return parse_booking(data["booking"])


def parse_booking_list(payload: object) -> list[MealBooking]:
    """Parse ``GET /booking?studentId=``: a bare list of bookings."""
    return [parse_booking(item) for item in _require_list(payload, "booking list")]


def parse_payment_confirmation(payload: object) -> PaymentConfirmation:
    """Parse ``PATCH /booking/{id}/pay``."""
    data = _require_mapping(payload, "payment response")
    if "booking" not in data:
        raise ResponseSchemaError("payment response: missing 'booking'", payload)
    return PaymentConfirmation(
        booking=parse_booking(data["booking"]),
        remaining_balance=_optional_decimal(data, "remainingBalance"),
    )


def parse_meal(payload: object) -> Meal:
    data = _require_mapping(payload, "meal")
    if "price" not in data:
        raise ResponseSchemaError("meal: missing field 'price'", payload)
    if "created_at" not in data:
        raise ResponseSchemaError("meal: missing field 'created_at'", payload)
    return Meal(
        id=_require_str(data, "id", "meal"),
        meal_type=_require_str(data, "meal_type", "meal"),
        status=_require_str(data, "status", "meal"),
        price=parse_decimal(data["price"], "price"),
        created_at=parse_timestamp(data["created_at"], "created_at"),
        user_id=_optional_str(data, "user_id", "meal"),
    )


def _parse_page(
    payload: object,
    key: str,
    parse_item: Callable[[object], T],
    page: int,
    limit: int,
) -> Page[T]:
    data = _require_mapping(payload, f"{key} page")
    items = [parse_item(item) for item in _require_list(data.get(key), f"{key} page '{key}'")]
    meta = _require_mapping(data.get("meta"), f"{key} page 'meta'")
    total = meta.get("total")
    if isinstance(total, bool) or not isinstance(total, int) or total < 0:
        raise ResponseSchemaError(f"{key} page: 'meta.total' must be a non-negative integer", payload)
    return Page(items=items, total=total, page=page, limit=limit)


def parse_user_page(payload: object, page: int, limit: int) -> Page[User]:
    """Parse ``GET /user``: ``{"users": [...], "meta": {"total": n}}``."""
    return _parse_page(payload, "users", parse_user, page, limit)


def parse_meal_page(payload: object, page: int, limit: int) -> Page[Meal]:
    """Parse ``GET /meal``: ``{"meals": [...], "meta": {"total": n}}``."""
    return _parse_page(payload, "meals", parse_meal, page, limit)


def parse_payment_receipt(payload: object, catalog: MealCatalog) -> PaymentReceipt:
    """Parse a payment confirmation summary posted back for rendering."""
    data = _require_mapping(payload, "payment receipt")
    raw_meal_type = _require_str(data, "mealType", "payment receipt")
    try:
        meal_type = MealType(raw_meal_type.upper())
    except ValueError as exc:
        raise ResponseSchemaError(f"payment receipt: unknown mealType {raw_meal_type!r}", payload) from exc
    for key in ("amountPaid", "timestamp"):
        if key not in data:
            raise ResponseSchemaError(f"payment receipt: missing '{key}'", payload)
    return PaymentReceipt(
        meal_type=meal_type,
        meal_label=catalog.label_for(meal_type),
        payment_method=_require_str(data, "paymentMethod", "payment receipt"),
        amount_paid=parse_decimal(data["amountPaid"], "amountPaid"),
        timestamp=parse_timestamp(data["timestamp"], "timestamp"),
        qr_code=_optional_str(data, "qrCode", "payment receipt"),
        mobile_money_number=_optional_str(data, "mobileMoneyNumber", "payment receipt"),
        remaining_balance=_optional_decimal(data, "remainingBalance"),
    )


def parse_finance_metrics(payload: object) -> FinanceMetrics:
    data = _require_mapping(payload, "finance metrics")
    for key in ("totalRevenue", "walletLiability"):
        if key not in data:
            raise ResponseSchemaError(f"finance metrics: missing '{key}'", payload)
    return FinanceMetrics(
        total_revenue=parse_decimal(data["totalRevenue"], "totalRevenue"),
        wallet_liability=parse_decimal(data["walletLiability"], "walletLiability"),
    )

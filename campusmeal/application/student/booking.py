"""Meal booking workflow: create a booking, then confirm its payment."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Literal

from campusmeal.domain.models import (
    MealBooking,
    MealCatalog,
    MealType,
    PaymentMethod,
    PaymentReceipt,
    Session,
)
from campusmeal.domain.parsing import ResponseSchemaError
from campusmeal.domain.wallet import (
    has_sufficient_balance,
    remaining_after_payment,
    validate_payment,
    wallet_balance,
)
from campusmeal.runtime import ApiError, CampusApiClient, get_logger

logger = get_logger(__name__)

BookMealStatus = Literal[
    "invalid_payment",
    "insufficient_balance",
    "booking_failed",
    "payment_failed",
    "confirmed",
]


def _local_now() -> datetime:
    return datetime.now().astimezone()


@dataclass(frozen=True)
class BookMealRequest:
    """Inputs for booking and paying for one meal."""

    session: Session
    meal_type: MealType
    payment_method: PaymentMethod
    amount: Decimal | None
    mobile_money_number: str | None = None
    catalog: MealCatalog = field(default_factory=MealCatalog)
    now: Callable[[], datetime] = _local_now


@dataclass(frozen=True)
class BookMealResult:
    """Outcome from the booking workflow."""

    status: BookMealStatus
    booking: MealBooking | None = None
    receipt: PaymentReceipt | None = None
    error: str | None = None


def run_book_meal(client: CampusApiClient, request: BookMealRequest) -> BookMealResult:
    """Validate, create the booking, confirm payment and summarize it.

    When payment confirmation fails the created booking is returned with
    ``payment_failed`` so callers can report the pending booking id.
    """
    option = request.catalog.get(request.meal_type)
    if option is None:
        return BookMealResult(status="invalid_payment", error=f"Unknown meal type: {request.meal_type.value}")

    error = validate_payment(option, request.payment_method, request.amount, request.mobile_money_number)
    if error is not None:
        return BookMealResult(status="invalid_payment", error=error)
    assert request.amount is not None

    balance = wallet_balance(request.session)
    if not has_sufficient_balance(balance, option):
        return BookMealResult(
            status="insufficient_balance",
            error="Insufficient balance. Please top up before booking.",
        )

    try:
        booking = client.create_booking(request.session.student_id, option.meal_type, option.price)
    except (ApiError, ResponseSchemaError) as exc:
        logger.error("Failed to create %s booking: %s", option.meal_type.value, exc)
        return BookMealResult(status="booking_failed", error=str(exc))

    try:
        confirmation = client.pay_booking(booking.id, request.payment_method)
    except (ApiError, ResponseSchemaError) as exc:
        logger.error("Failed to confirm payment for booking %s: %s", booking.id, exc)
        return BookMealResult(status="payment_failed", booking=booking, error=str(exc))

    mobile_number = None
    if request.payment_method is PaymentMethod.MOBILE_MONEY and request.mobile_money_number:
        mobile_number = request.mobile_money_number.strip()

    receipt = PaymentReceipt(
        meal_type=option.meal_type,
        meal_label=option.label,
        payment_method=request.payment_method.value,
        amount_paid=request.amount,
        timestamp=request.now(),
        qr_code=confirmation.booking.qr_code or booking.qr_code,
        mobile_money_number=mobile_number,
        remaining_balance=remaining_after_payment(balance, option, confirmation.remaining_balance),
    )
    logger.info("Booking %s confirmed (%s, %s)", booking.id, option.label, request.payment_method.value)
    return BookMealResult(status="confirmed", booking=confirmation.booking, receipt=receipt)

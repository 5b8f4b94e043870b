"""Wallet balance and payment validation rules."""

from __future__ import annotations

from decimal import Decimal

from campusmeal.domain.models import MealOption, PaymentMethod, Session

MIN_MOBILE_MONEY_DIGITS = 6
ZERO = Decimal("0")


def wallet_balance(session: Session) -> Decimal:
    """Resolve the caller's wallet balance.

    The student profile is authoritative; the user record's ``mealBalance``
    is only consulted when no profile balance exists.
    """
    if session.student is not None and session.student.balance is not None:
        return session.student.balance
    if session.user.meal_balance is not None:
        return session.user.meal_balance
    return ZERO


def _valid_mobile_number(mobile_money_number: str | None) -> bool:
    return bool(mobile_money_number) and len(mobile_money_number.strip()) >= MIN_MOBILE_MONEY_DIGITS


def validate_payment(
    option: MealOption,
    method: PaymentMethod,
    amount: Decimal | None,
    mobile_money_number: str | None = None,
) -> str | None:
    """Return an error message for an invalid payment, or None when valid."""
    if amount is None or not amount.is_finite() or amount <= ZERO:
        return "Please enter a valid payment amount."
    if amount < option.price:
        return f"Amount must be at least ${option.price:.2f}."
    if method is PaymentMethod.MOBILE_MONEY and not _valid_mobile_number(mobile_money_number):
        return f"Enter a valid mobile money number (at least {MIN_MOBILE_MONEY_DIGITS} digits)."
    return None


def validate_top_up(
    method: PaymentMethod,
    amount: Decimal | None,
    mobile_money_number: str | None = None,
) -> str | None:
    """Return an error message for an invalid top-up, or None when valid."""
    if amount is None or not amount.is_finite() or amount <= ZERO:
        return "Enter a valid top-up amount."
    if method is PaymentMethod.MOBILE_MONEY and not _valid_mobile_number(mobile_money_number):
        return "Enter a valid mobile money number."
    return None


def has_sufficient_balance(balance: Decimal, option: MealOption) -> bool:
    return balance >= option.price


def remaining_after_payment(
    balance: Decimal,
    option: MealOption,
    reported: Decimal | None = None,
) -> Decimal:
    """Balance left after paying for ``option``.

    The API-reported figure wins; otherwise it is estimated locally and never
    goes below zero.
    """
    if reported is not None:
        return reported
    return max(balance - option.price, ZERO)


def top_up_note(
    note: str | None,
    method: PaymentMethod,
    mobile_money_number: str | None = None,
) -> str | None:
    """Build the free-text note sent with a top-up request."""
    parts: list[str] = []
    if note and note.strip():
        parts.append(note.strip())
    if method is PaymentMethod.MOBILE_MONEY and mobile_money_number and mobile_money_number.strip():
        parts.append(f"Mobile money {mobile_money_number.strip()}")
    if not parts:
        return None
    return " | ".join(parts)

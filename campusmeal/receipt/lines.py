"""Text content for meal receipts."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from campusmeal.domain.models import MealBooking, MealCatalog, PaymentReceipt, Session

RESTAURANT_NAME = "Smart Campus Restaurant"
RULE = "-" * 35
DATE_FORMAT = "%Y-%m-%d %H:%M"


def money(value: Decimal | None) -> str:
    """Format a monetary amount as ``$x.xx``; ``N/A`` when missing."""
    if value is None:
        return "N/A"
    return f"${value:.2f}"


def format_timestamp(value: datetime) -> str:
    return value.strftime(DATE_FORMAT)


def receipt_filename(booking_id: str) -> str:
    return f"receipt-{booking_id}.pdf"


def booking_receipt_lines(
    booking: MealBooking,
    session: Session,
    balance: Decimal,
    catalog: MealCatalog | None = None,
) -> list[str]:
    """Lines of the downloadable receipt for one booking."""
    catalog = catalog or MealCatalog()
    student_name = session.user.full_name or "Student"
    price = money(booking.price) if booking.price else "N/A"
    return [
        RESTAURANT_NAME,
        "Meal Receipt",
        RULE,
        f"Student Name: {student_name}",
        f"Registration No: {session.registration_number}",
        f"Meal Type: {catalog.label_for(booking.meal_type)}",
        f"Price: {price}",
        f"Booking Status: {booking.status}",
        f"QR Code: {booking.qr_code or 'Pending'}",
        f"Date: {format_timestamp(booking.created_at)}",
        f"Remaining Balance: {money(balance)}",
    ]


def payment_receipt_lines(receipt: PaymentReceipt) -> list[str]:
    """Lines of the confirmation shown right after a successful payment."""
    lines = [
        RESTAURANT_NAME,
        "Payment Receipt",
        RULE,
        f"Meal: {receipt.meal_label}",
        f"Payment Method: {receipt.payment_method}",
        f"Amount Paid: {money(receipt.amount_paid)}",
    ]
    if receipt.mobile_money_number:
        lines.append(f"Mobile Money Number: {receipt.mobile_money_number}")
    lines.extend(
        [
            f"QR Code: {receipt.qr_code or 'Pending'}",
            f"Remaining Balance: {money(receipt.remaining_balance)}",
            f"Paid At: {format_timestamp(receipt.timestamp)}",
        ]
    )
    return lines

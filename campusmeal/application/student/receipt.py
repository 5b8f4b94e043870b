"""Receipt download workflows."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from campusmeal.domain.models import MealBooking, MealCatalog, PaymentReceipt, Session
from campusmeal.domain.parsing import ResponseSchemaError
from campusmeal.domain.wallet import wallet_balance
from campusmeal.receipt.lines import booking_receipt_lines, payment_receipt_lines, receipt_filename
from campusmeal.receipt.pdf import encode
from campusmeal.runtime import ApiError, CampusApiClient, get_logger, receipts_dir, save_document

logger = get_logger(__name__)

ReceiptStatus = Literal["not_found", "failed", "saved"]


@dataclass(frozen=True)
class DownloadReceiptRequest:
    """Inputs for saving a booking receipt."""

    session: Session
    booking_id: str
    output_dir: Path
    catalog: MealCatalog = field(default_factory=MealCatalog)
    # Already-loaded history; fetched from the API when None.
    bookings: Sequence[MealBooking] | None = None


@dataclass(frozen=True)
class DownloadReceiptResult:
    """Outcome from the receipt download workflow."""

    status: ReceiptStatus
    path: Path | None = None
    error: str | None = None


def run_download_receipt(client: CampusApiClient, request: DownloadReceiptRequest) -> DownloadReceiptResult:
    """Render the receipt for one of the caller's bookings and save it."""
    bookings = request.bookings
    if bookings is None:
        try:
            bookings = client.list_bookings(request.session.student_id)
        except (ApiError, ResponseSchemaError) as exc:
            return DownloadReceiptResult(status="failed", error=str(exc))

    booking = next((b for b in bookings if b.id == request.booking_id), None)
    if booking is None:
        return DownloadReceiptResult(status="not_found", error=f"Booking not found: {request.booking_id}")

    lines = booking_receipt_lines(booking, request.session, wallet_balance(request.session), request.catalog)
    try:
        path = save_document(
            encode(lines),
            receipts_dir(request.output_dir),
            receipt_filename(booking.id),
            overwrite=True,
        )
    except OSError as exc:
        logger.error("Failed to save receipt for booking %s: %s", booking.id, exc)
        return DownloadReceiptResult(status="failed", error=f"Failed to save receipt: {exc}")
    return DownloadReceiptResult(status="saved", path=path)


def save_payment_receipt(receipt: PaymentReceipt, output_dir: Path) -> Path:
    """Save the confirmation for a just-paid booking."""
    filename = f"payment-{receipt.meal_type.value.lower()}-{receipt.timestamp.strftime('%Y%m%d_%H%M%S')}.pdf"
    return save_document(encode(payment_receipt_lines(receipt)), receipts_dir(output_dir), filename)

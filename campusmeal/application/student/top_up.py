"""Wallet top-up workflow."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal

from campusmeal.domain.models import PaymentMethod, Session
from campusmeal.domain.parsing import ResponseSchemaError
from campusmeal.domain.wallet import top_up_note, validate_top_up
from campusmeal.runtime import ApiError, CampusApiClient, get_logger

logger = get_logger(__name__)

TopUpStatus = Literal["invalid_top_up", "failed", "topped_up"]


@dataclass(frozen=True)
class TopUpRequest:
    """Inputs for adding funds to a student wallet."""

    session: Session
    amount: Decimal | None
    payment_method: PaymentMethod = PaymentMethod.MOBILE_MONEY
    mobile_money_number: str | None = None
    provider_reference: str | None = None
    note: str | None = None


@dataclass(frozen=True)
class TopUpResult:
    """Outcome from the top-up workflow."""

    status: TopUpStatus
    message: str | None = None
    error: str | None = None


def run_top_up(client: CampusApiClient, request: TopUpRequest) -> TopUpResult:
    error = validate_top_up(request.payment_method, request.amount, request.mobile_money_number)
    if error is not None:
        return TopUpResult(status="invalid_top_up", error=error)
    assert request.amount is not None

    try:
        body = client.top_up(
            request.session.student_id,
            request.amount,
            request.payment_method,
            provider_reference=request.provider_reference or None,
            note=top_up_note(request.note, request.payment_method, request.mobile_money_number),
        )
    except (ApiError, ResponseSchemaError) as exc:
        logger.error("Top-up failed for student %s: %s", request.session.student_id, exc)
        return TopUpResult(status="failed", error=str(exc))

    message = body.get("message") if isinstance(body.get("message"), str) else None
    logger.info("Topped up %s for student %s", request.amount, request.session.student_id)
    return TopUpResult(status="topped_up", message=message or "Balance added successfully.")

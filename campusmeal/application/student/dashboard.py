"""Student dashboard loading workflow."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from campusmeal.domain.models import Session, StudentDashboard
from campusmeal.domain.parsing import ResponseSchemaError
from campusmeal.domain.wallet import wallet_balance
from campusmeal.runtime import ApiError, ApiUnavailable, CampusApiClient, get_logger

logger = get_logger(__name__)

DashboardStatus = Literal["loaded", "unavailable", "failed"]


@dataclass(frozen=True)
class LoadDashboardRequest:
    """Inputs for loading the student dashboard."""

    token: str
    user_id: str


@dataclass(frozen=True)
class LoadDashboardResult:
    """Outcome from loading the student dashboard."""

    status: DashboardStatus
    dashboard: StudentDashboard | None = None
    error: str | None = None


def build_session(client: CampusApiClient, token: str, user_id: str) -> Session:
    """Resolve the caller's user record and, when available, student profile.

    A missing or unreadable student profile is not fatal: the session falls
    back to the user record for the student id and balance.
    """
    user = client.get_user(user_id)
    try:
        student = client.get_student(user.id)
    except ApiUnavailable:
        raise
    except (ApiError, ResponseSchemaError) as exc:
        logger.warning("Unable to fetch student profile for %s: %s", user.id, exc)
        student = None
    return Session(token=token, user=user, student=student)


def run_load_student_dashboard(client: CampusApiClient, request: LoadDashboardRequest) -> LoadDashboardResult:
    """Load session, booking history and wallet balance."""
    try:
        session = build_session(client, request.token, request.user_id)
        bookings = client.list_bookings(session.student_id)
    except ApiUnavailable as exc:
        return LoadDashboardResult(status="unavailable", error=str(exc))
    except (ApiError, ResponseSchemaError) as exc:
        logger.error("Dashboard fetch error: %s", exc)
        return LoadDashboardResult(status="failed", error=str(exc))

    dashboard = StudentDashboard(session=session, bookings=bookings, balance=wallet_balance(session))
    logger.debug("Loaded %d bookings for student %s", len(bookings), session.student_id)
    return LoadDashboardResult(status="loaded", dashboard=dashboard)

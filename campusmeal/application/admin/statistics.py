"""Admin overview statistics workflow."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Literal, TypeVar

from campusmeal.application.admin.access import PermissionDenied, require_admin
from campusmeal.domain.models import FinanceMetrics, Meal, Page, Session, User
from campusmeal.domain.parsing import ResponseSchemaError
from campusmeal.domain.statistics import Statistics, compute_statistics
from campusmeal.runtime import ApiError, CampusApiClient, get_logger
from campusmeal.runtime.api_client import MAX_PAGE_LIMIT

logger = get_logger(__name__)

T = TypeVar("T")

StatisticsStatus = Literal["forbidden", "failed", "loaded"]


@dataclass(frozen=True)
class StatisticsResult:
    """Statistics plus the full record sets they were computed from."""

    status: StatisticsStatus
    statistics: Statistics | None = None
    users: list[User] = field(default_factory=list)
    meals: list[Meal] = field(default_factory=list)
    error: str | None = None


def fetch_all(fetch_page: Callable[[int, int], Page[T]], limit: int = MAX_PAGE_LIMIT) -> list[T]:
    """Collect every record of a paginated listing, page by page."""
    items: list[T] = []
    page_number = 1
    while True:
        page = fetch_page(page_number, limit)
        items.extend(page.items)
        if not page.items or len(items) >= page.total:
            return items
        page_number += 1


def _fetch_finance_metrics(client: CampusApiClient) -> FinanceMetrics | None:
    try:
        return client.get_finance_metrics()
    except (ApiError, ResponseSchemaError) as exc:
        logger.warning("Finance metrics unavailable: %s", exc)
        return None


def run_load_statistics(client: CampusApiClient, session: Session) -> StatisticsResult:
    """Fetch all users and meals plus finance metrics, then aggregate."""
    try:
        require_admin(session)
    except PermissionDenied as exc:
        return StatisticsResult(status="forbidden", error=str(exc))

    try:
        users = fetch_all(lambda page, limit: client.list_users(page=page, limit=limit))
        meals = fetch_all(lambda page, limit: client.list_meals(page=page, limit=limit))
    except (ApiError, ResponseSchemaError) as exc:
        logger.error("Statistics fetch error: %s", exc)
        return StatisticsResult(status="failed", error=str(exc))

    statistics = compute_statistics(users, meals, _fetch_finance_metrics(client))
    if statistics.revenue_source == "meal_prices":
        logger.warning(
            "Reporting revenue as the sum of %d meal prices; the finance figure was not available",
            len(meals),
        )
    logger.debug("Statistics: %s", statistics)
    return StatisticsResult(status="loaded", statistics=statistics, users=users, meals=meals)

"""Paginated user/meal listings and deletions for administrators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

from campusmeal.application.admin.access import PermissionDenied, require_admin
from campusmeal.domain.models import Meal, Page, Session, User
from campusmeal.domain.pagination import DEFAULT_PAGE_SIZE, PageWindow
from campusmeal.domain.parsing import ResponseSchemaError
from campusmeal.runtime import ApiError, CampusApiClient, get_logger

logger = get_logger(__name__)

T = TypeVar("T")

ListingStatus = Literal["forbidden", "failed", "loaded"]
DeleteStatus = Literal["forbidden", "failed", "deleted"]


@dataclass(frozen=True)
class ListingResult(Generic[T]):
    """One page of records with its window for display."""

    status: ListingStatus
    page: Page[T] | None = None
    window: PageWindow | None = None
    error: str | None = None


@dataclass(frozen=True)
class DeleteResult:
    status: DeleteStatus
    error: str | None = None


def run_list_users(client: CampusApiClient, session: Session, page: int = 1) -> ListingResult[User]:
    """List users newest first, ten per page."""
    try:
        require_admin(session)
        users = client.list_users(page=page, limit=DEFAULT_PAGE_SIZE, sort="created_at", order="desc")
    except PermissionDenied as exc:
        return ListingResult(status="forbidden", error=str(exc))
    except (ApiError, ResponseSchemaError) as exc:
        logger.error("Fetch users error: %s", exc)
        return ListingResult(status="failed", error=str(exc))
    return ListingResult(status="loaded", page=users, window=PageWindow(page=page, total=users.total))


def run_list_meals(client: CampusApiClient, session: Session, page: int = 1) -> ListingResult[Meal]:
    """List meals newest first, ten per page."""
    try:
        require_admin(session)
        meals = client.list_meals(page=page, limit=DEFAULT_PAGE_SIZE, sort="created_at", order="desc")
    except PermissionDenied as exc:
        return ListingResult(status="forbidden", error=str(exc))
    except (ApiError, ResponseSchemaError) as exc:
        logger.error("Fetch meals error: %s", exc)
        return ListingResult(status="failed", error=str(exc))
    return ListingResult(status="loaded", page=meals, window=PageWindow(page=page, total=meals.total))


def run_delete_user(client: CampusApiClient, session: Session, user_id: str) -> DeleteResult:
    try:
        require_admin(session)
        client.delete_user(user_id)
    except PermissionDenied as exc:
        return DeleteResult(status="forbidden", error=str(exc))
    except ApiError as exc:
        return DeleteResult(status="failed", error=str(exc))
    logger.info("Deleted user %s", user_id)
    return DeleteResult(status="deleted")


def run_delete_meal(client: CampusApiClient, session: Session, meal_id: str) -> DeleteResult:
    try:
        require_admin(session)
        client.delete_meal(meal_id)
    except PermissionDenied as exc:
        return DeleteResult(status="forbidden", error=str(exc))
    except ApiError as exc:
        return DeleteResult(status="failed", error=str(exc))
    logger.info("Deleted meal %s", meal_id)
    return DeleteResult(status="deleted")

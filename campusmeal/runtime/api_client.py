"""HTTP client for the campus meal-ordering REST API."""

from __future__ import annotations

import time
from decimal import Decimal
from typing import Any

import httpx

from campusmeal.domain.models import (
    FinanceMetrics,
    Meal,
    MealBooking,
    MealType,
    Page,
    PaymentConfirmation,
    PaymentMethod,
    StudentProfile,
    User,
)
from campusmeal.domain.parsing import (
    ResponseSchemaError,
    parse_booking_envelope,
    parse_booking_list,
    parse_finance_metrics,
    parse_meal_page,
    parse_payment_confirmation,
    parse_student,
    parse_user_envelope,
    parse_user_page,
)
from campusmeal.runtime.logging import get_logger

logger = get_logger(__name__)

MAX_PAGE_LIMIT = 100


class ApiError(RuntimeError):
    """Raised when the API answers with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ApiUnavailable(ApiError):
    """Raised when the API cannot be reached."""


def _money(value: Decimal) -> float | int:
    # JSON has no decimal type; whole amounts go out as integers.
    if value == value.to_integral_value():
        return int(value)
    return float(value)


class CampusApiClient:
    """Thin synchronous wrapper over the REST endpoints.

    Every method returns parsed domain objects and raises ApiError,
    ApiUnavailable or ResponseSchemaError on failure.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.Client(base_url=self.base_url, headers=headers, timeout=timeout, transport=transport)

    def __enter__(self) -> CampusApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(
        self,
        method: str,
        path: str,
        default_error: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        start_time = time.time()
        try:
            response = self._client.request(method, path, params=params, json=json)
        except httpx.RequestError as e:
            logger.error("Failed to reach API at %s: %s", self.base_url, e)
            raise ApiUnavailable(f"Failed to connect to API at {self.base_url}: {e}") from e

        logger.debug("%s %s -> %s in %.2fs", method, path, response.status_code, time.time() - start_time)
        if response.is_success:
            return response

        message = default_error
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and isinstance(body.get("message"), str) and body["message"]:
            message = body["message"]
        logger.warning("%s %s failed: %s %s", method, path, response.status_code, message)
        raise ApiError(message, status_code=response.status_code)

    @staticmethod
    def _json(response: httpx.Response) -> object:
        try:
            return response.json()
        except ValueError as exc:
            raise ResponseSchemaError(f"Response is not valid JSON: {exc}") from exc

    # --- Student endpoints ---
    def get_user(self, user_id: str) -> User:
        response = self._request("GET", f"/user/{user_id}", "Unable to fetch student profile")
        return parse_user_envelope(self._json(response))

    def get_student(self, user_id: str) -> StudentProfile | None:
        """Student profile linked to ``user_id``; None when the user has none."""
        try:
            response = self._request("GET", "/student", "Unable to fetch student record", params={"userId": user_id})
        except ApiError as exc:
            if exc.status_code == 404:
                return None
            raise
        return parse_student(self._json(response))

    def list_bookings(self, student_id: str) -> list[MealBooking]:
        response = self._request(
            "GET", "/booking", "Unable to fetch booking history", params={"studentId": student_id}
        )
        return parse_booking_list(self._json(response))

    def create_booking(self, student_id: str, meal_type: MealType, price: Decimal) -> MealBooking:
        response = self._request(
            "POST",
            "/booking",
            "Failed to create booking",
            json={"studentId": student_id, "mealType": meal_type.value, "price": _money(price)},
        )
        return parse_booking_envelope(self._json(response))

    def pay_booking(self, booking_id: str, method: PaymentMethod) -> PaymentConfirmation:
        response = self._request(
            "PATCH",
            f"/booking/{booking_id}/pay",
            "Failed to confirm payment",
            json={"paymentMethod": method.value},
        )
        return parse_payment_confirmation(self._json(response))

    def top_up(
        self,
        student_id: str,
        amount: Decimal,
        method: PaymentMethod,
        provider_reference: str | None = None,
        note: str | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "studentId": student_id,
            "amount": _money(amount),
            "paymentMethod": method.value,
        }
        if provider_reference:
            payload["providerReference"] = provider_reference
        if note:
            payload["note"] = note
        response = self._request("POST", "/student/topup", "Failed to top up balance.", json=payload)
        body = self._json(response)
        if not isinstance(body, dict):
            raise ResponseSchemaError("top-up response: expected an object", body)
        return body

    # --- Admin endpoints ---
    def list_users(
        self, page: int = 1, limit: int = 10, sort: str = "created_at", order: str = "desc"
    ) -> Page[User]:
        response = self._request(
            "GET",
            "/user",
            "Failed to fetch users",
            params={"page": page, "limit": min(limit, MAX_PAGE_LIMIT), "sort": sort, "order": order},
        )
        return parse_user_page(self._json(response), page, limit)

    def list_meals(
        self, page: int = 1, limit: int = 10, sort: str = "created_at", order: str = "desc"
    ) -> Page[Meal]:
        response = self._request(
            "GET",
            "/meal",
            "Failed to fetch meals",
            params={"page": page, "limit": min(limit, MAX_PAGE_LIMIT), "sort": sort, "order": order},
        )
        return parse_meal_page(self._json(response), page, limit)

    def get_finance_metrics(self) -> FinanceMetrics:
        response = self._request("GET", "/metrics/finance", "Finance metrics unavailable")
        return parse_finance_metrics(self._json(response))

    def delete_user(self, user_id: str) -> None:
        self._request("DELETE", f"/user/{user_id}", "Failed to delete user")

    def delete_meal(self, meal_id: str) -> None:
        self._request("DELETE", f"/meal/{meal_id}", "Failed to delete meal")

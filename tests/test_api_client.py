"""CampusApiClient against an in-memory transport."""

from __future__ import annotations

import json
from decimal import Decimal

import httpx
import pytest
from conftest import booking_payload, meal_payload, student_payload, user_payload

from campusmeal.domain.models import MealType, PaymentMethod
from campusmeal.domain.parsing import ResponseSchemaError
from campusmeal.runtime import ApiError, ApiUnavailable, CampusApiClient


def test_requests_carry_bearer_token(fake_api) -> None:
    fake_api.add("GET", "/user/u1", {"user": user_payload()})

    with fake_api.client(token="secret") as client:
        user = client.get_user("u1")

    assert user.email == "ada@campus.edu"
    request = fake_api.requests[0]
    assert request.headers["Authorization"] == "Bearer secret"
    assert request.headers["Content-Type"] == "application/json"


def test_no_authorization_header_without_token(fake_api) -> None:
    fake_api.add("GET", "/user/u1", {"user": user_payload()})

    with fake_api.client(token=None) as client:
        client.get_user("u1")

    assert "Authorization" not in fake_api.requests[0].headers


def test_get_student_passes_user_id(fake_api) -> None:
    fake_api.add("GET", "/student", student_payload())

    with fake_api.client() as client:
        student = client.get_student("u1")

    assert student is not None
    assert student.id == "s1"
    assert fake_api.requests[0].url.params["userId"] == "u1"


def test_get_student_returns_none_on_404(fake_api) -> None:
    with fake_api.client() as client:
        assert client.get_student("u1") is None


def test_get_student_raises_other_errors(fake_api) -> None:
    fake_api.add("GET", "/student", {"message": "boom"}, status=500)

    with fake_api.client() as client, pytest.raises(ApiError) as excinfo:
        client.get_student("u1")

    assert excinfo.value.status_code == 500


def test_error_message_comes_from_body(fake_api) -> None:
    fake_api.add("POST", "/booking", {"message": "Meal sold out"}, status=409)

    with fake_api.client() as client, pytest.raises(ApiError, match="Meal sold out") as excinfo:
        client.create_booking("s1", MealType.LUNCH, Decimal("8"))

    assert excinfo.value.status_code == 409


def test_error_falls_back_to_default_message(fake_api) -> None:
    fake_api.add("GET", "/booking", b"<html>bad gateway</html>", status=502)

    with fake_api.client() as client, pytest.raises(ApiError, match="Unable to fetch booking history"):
        client.list_bookings("s1")


def test_connection_failure_raises_api_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = CampusApiClient("http://api.test", token="t", transport=httpx.MockTransport(handler))

    with client, pytest.raises(ApiUnavailable, match="Failed to connect"):
        client.get_user("u1")


def test_invalid_json_raises_schema_error(fake_api) -> None:
    fake_api.add("GET", "/metrics/finance", b"not json")

    with fake_api.client() as client, pytest.raises(ResponseSchemaError):
        client.get_finance_metrics()


def test_create_booking_payload(fake_api) -> None:
    fake_api.add("POST", "/booking", {"booking": booking_payload(status="PENDING_PAYMENT", qr_code=None)})

    with fake_api.client() as client:
        booking = client.create_booking("s1", MealType.LUNCH, Decimal("8"))

    assert booking.status == "PENDING_PAYMENT"
    assert json.loads(fake_api.requests[0].content) == {"studentId": "s1", "mealType": "LUNCH", "price": 8}


def test_pay_booking(fake_api) -> None:
    fake_api.add("PATCH", "/booking/b1/pay", {"booking": booking_payload(), "remainingBalance": "12.00"})

    with fake_api.client() as client:
        confirmation = client.pay_booking("b1", PaymentMethod.MOBILE_MONEY)

    assert confirmation.remaining_balance == Decimal("12.00")
    assert json.loads(fake_api.requests[0].content) == {"paymentMethod": "MOBILE_MONEY"}


def test_top_up_sends_optional_fields_only_when_set(fake_api) -> None:
    fake_api.add("POST", "/student/topup", {"message": "ok"})

    with fake_api.client() as client:
        client.top_up("s1", Decimal("12.50"), PaymentMethod.CASH)
        client.top_up("s1", Decimal("5"), PaymentMethod.MOBILE_MONEY, provider_reference="REF1", note="n")

    first, second = (json.loads(r.content) for r in fake_api.requests)
    assert first == {"studentId": "s1", "amount": 12.5, "paymentMethod": "CASH"}
    assert second == {
        "studentId": "s1",
        "amount": 5,
        "paymentMethod": "MOBILE_MONEY",
        "providerReference": "REF1",
        "note": "n",
    }


def test_top_up_requires_object_response(fake_api) -> None:
    fake_api.add("POST", "/student/topup", ["ok"])

    with fake_api.client() as client, pytest.raises(ResponseSchemaError):
        client.top_up("s1", Decimal("5"), PaymentMethod.CASH)


def test_list_meals_query_and_limit_cap(fake_api) -> None:
    fake_api.add("GET", "/meal", {"meals": [meal_payload()], "meta": {"total": 1}})

    with fake_api.client() as client:
        page = client.list_meals(page=3, limit=500)

    params = fake_api.requests[0].url.params
    assert params["page"] == "3"
    assert params["limit"] == "100"
    assert params["sort"] == "created_at"
    assert params["order"] == "desc"
    assert page.total == 1


def test_delete_endpoints(fake_api) -> None:
    fake_api.add("DELETE", "/user/u2", None, status=204)
    fake_api.add("DELETE", "/meal/m2", {"message": "deleted"})

    with fake_api.client() as client:
        client.delete_user("u2")
        client.delete_meal("m2")

    assert fake_api.paths() == ["DELETE /user/u2", "DELETE /meal/m2"]


def test_base_url_trailing_slash_is_stripped() -> None:
    client = CampusApiClient("http://api.test/", transport=httpx.MockTransport(lambda r: httpx.Response(200)))

    assert client.base_url == "http://api.test"
    client.close()

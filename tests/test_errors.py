import asyncio
import json
from decimal import Decimal
from types import SimpleNamespace

import pytest
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError

from dashboard.api.deps import get_user_id, require_month_key
from dashboard.api.event_data import create_event_data, delete_event_data
from dashboard.api.notification_data import create_notification_data, delete_notification_data
from dashboard.errors import (
    ErrorType,
    Forbidden,
    NotFound,
    ValidationFailed,
    describe_validation_errors,
    error_payload,
    handle_api_error,
    handle_database_error,
    handle_request_validation_error,
)
from dashboard.models.enums import BudgetCategory
from dashboard.schemas.budget import MonthTransaction
from dashboard.schemas.common import ApiResponse

REQUEST = SimpleNamespace(method="GET", url=SimpleNamespace(path="/api/budget"))


def _body(response) -> dict:
    return json.loads(response.body)


def test_typed_error_payload_has_timestamp() -> None:
    payload = error_payload("Transaction not found", ErrorType.NOT_FOUND, "No transaction found with ID: 7")

    assert payload["success"] is False
    assert payload["errorType"] == "NOT_FOUND"
    assert payload["details"] == "No transaction found with ID: 7"
    assert "timestamp" in payload


def test_not_found_renders_404_envelope() -> None:
    exc = NotFound("Month not found", "No budget data found for month: 2024-01")

    response = asyncio.run(handle_api_error(REQUEST, exc))

    assert response.status_code == 404
    assert _body(response)["error"] == "Month not found"
    assert _body(response)["errorType"] == "NOT_FOUND"


def test_forbidden_has_no_error_type() -> None:
    response = asyncio.run(handle_api_error(REQUEST, Forbidden("Direct creation is not allowed")))

    assert response.status_code == 403
    assert _body(response) == {"success": False, "error": "Direct creation is not allowed"}


def test_missing_fields_are_listed() -> None:
    errors = [
        {"type": "missing", "loc": ("body", "source"), "msg": "Field required"},
        {"type": "missing", "loc": ("body", "amount"), "msg": "Field required"},
    ]

    assert describe_validation_errors(errors) == ("Missing required fields", "Required fields: source, amount")


def test_request_validation_error_becomes_400() -> None:
    exc = RequestValidationError([{"type": "missing", "loc": ("body", "purpose"), "msg": "Field required"}])

    response = asyncio.run(handle_request_validation_error(REQUEST, exc))

    assert response.status_code == 400
    assert _body(response)["errorType"] == "VALIDATION_ERROR"
    assert _body(response)["details"] == "Required fields: purpose"


def test_database_error_becomes_500() -> None:
    response = asyncio.run(handle_database_error(REQUEST, SQLAlchemyError("connection refused")))

    assert response.status_code == 500
    assert _body(response)["errorType"] == "DATABASE_ERROR"
    assert "connection refused" in _body(response)["details"]


@pytest.mark.parametrize(
    "endpoint",
    [
        lambda: create_notification_data(),
        lambda: delete_notification_data("n-1"),
        lambda: create_event_data(),
        lambda: delete_event_data("e-1"),
    ],
)
def test_derived_record_writes_are_forbidden(endpoint) -> None:
    with pytest.raises(Forbidden) as exc_info:
        asyncio.run(endpoint())

    assert exc_info.value.status_code == 403
    assert exc_info.value.error_type is None
    assert "not allowed" in exc_info.value.error


def test_malformed_month_key_is_a_validation_error() -> None:
    with pytest.raises(ValidationFailed) as exc_info:
        require_month_key("2024-6")

    assert exc_info.value.status_code == 400
    assert require_month_key("2024-06") == "2024-06"


def test_user_id_falls_back_to_default() -> None:
    assert asyncio.run(get_user_id(None)) == "default-user"
    assert asyncio.run(get_user_id("  ")) == "default-user"
    assert asyncio.run(get_user_id("alice")) == "alice"


def test_success_envelope_uses_camel_case() -> None:
    instance = MonthTransaction(
        id="tpl-2024-01",
        template_id="tpl",
        source="Rent",
        category=BudgetCategory.EXPENSE,
        purpose="Monthly rent",
        due_day=5,
        amount=Decimal("900.50"),
    )

    payload = ApiResponse(data=instance).model_dump(mode="json", by_alias=True)

    assert payload["success"] is True
    assert payload["data"]["templateId"] == "tpl"
    assert payload["data"]["dueDay"] == 5
    assert payload["data"]["isCustomized"] is False
    assert payload["data"]["amount"] == 900.5


def test_due_date_alias_is_accepted() -> None:
    instance = MonthTransaction.model_validate(
        {
            "id": "x",
            "source": "Rent",
            "category": "Expense",
            "purpose": "Monthly rent",
            "dueDate": 7,
            "dynamicDateRule": "previous",
            "amount": 10,
        }
    )

    assert instance.due_day == 7
    assert instance.dynamic_rule.value == "previous"

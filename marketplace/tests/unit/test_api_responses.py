from unittest.mock import Mock

import pytest
from rest_framework import exceptions, status

from utils.api_responses import (
    GENERIC_SERVER_ERROR,
    build_envelope,
    envelope_exception_handler,
    error_from_result,
    paginated_data,
    status_for_error,
    success_response,
)
from utils.pagination import Page
from utils.service_base import ErrorCodes, service_err


@pytest.mark.unit
class TestEnvelope:
    def test_optional_keys_are_omitted(self):
        assert build_envelope(True) == {"success": True}
        assert build_envelope(False, message="Nope", errors={"field": ["bad"]}) == {
            "success": False,
            "message": "Nope",
            "errors": {"field": ["bad"]},
        }

    def test_success_response(self):
        response = success_response({"item": 1}, message="Done", status_code=status.HTTP_201_CREATED)

        assert response.status_code == 201
        assert response.data == {"success": True, "message": "Done", "data": {"item": 1}}

    def test_paginated_data(self):
        page = Page(items=[], page=1, limit=10, total=0)

        assert paginated_data("orders", ["x"], page) == {
            "orders": ["x"],
            "pagination": {"page": 1, "limit": 10, "total": 0, "pages": 0},
        }


@pytest.mark.unit
class TestErrorMapping:
    @pytest.mark.parametrize(
        "code, expected",
        [
            (ErrorCodes.INSUFFICIENT_STOCK, 400),
            (ErrorCodes.CART_EMPTY, 400),
            (ErrorCodes.INVALID_CREDENTIALS, 401),
            (ErrorCodes.ACCOUNT_DEACTIVATED, 403),
            (ErrorCodes.ORDER_NOT_FOUND, 404),
            (ErrorCodes.DUPLICATE_REVIEW, 409),
            (ErrorCodes.EMAIL_ALREADY_EXISTS, 409),
            (ErrorCodes.DATABASE_ERROR, 500),
            ("something_new", 500),
        ],
    )
    def test_status_for_error(self, code, expected):
        assert status_for_error(code) == expected

    def test_server_errors_hide_details(self):
        response = error_from_result(service_err(ErrorCodes.DATABASE_ERROR, "deadlock on orders table"))

        assert response.status_code == 500
        assert response.data == {"success": False, "message": GENERIC_SERVER_ERROR}

    def test_client_errors_keep_message(self):
        response = error_from_result(service_err(ErrorCodes.CART_EMPTY, "Cart is empty"))

        assert response.status_code == 400
        assert response.data["message"] == "Cart is empty"


@pytest.mark.unit
class TestExceptionHandler:
    def setup_method(self):
        self.context = {"view": Mock(), "request": None}

    def test_validation_error(self):
        response = envelope_exception_handler(exceptions.ValidationError({"rating": ["Too high"]}), self.context)

        assert response.status_code == 400
        assert response.data == {"success": False, "message": "Validation failed", "errors": {"rating": ["Too high"]}}

    def test_not_authenticated(self):
        response = envelope_exception_handler(exceptions.NotAuthenticated(), self.context)

        assert response.status_code == 401
        assert response.data["success"] is False
        assert response.data["message"] == "Authentication credentials were not provided."

    def test_unexpected_exception(self):
        response = envelope_exception_handler(RuntimeError("secret internals"), self.context)

        assert response.status_code == 500
        assert response.data == {"success": False, "message": GENERIC_SERVER_ERROR}

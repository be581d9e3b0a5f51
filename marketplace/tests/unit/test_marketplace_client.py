"""
Unit tests for the PineMarket HTTP client.

The requests.Session is mocked, so no server is needed.
"""

from unittest.mock import Mock

import pytest
import requests

from pinemarket_client import ApiError, MarketplaceClient


def make_response(status_code=200, body=None):
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    if body is None:
        response.json.side_effect = ValueError("No JSON")
    else:
        response.json.return_value = body
    return response


@pytest.mark.unit
class TestMarketplaceClient:
    def setup_method(self):
        self.session = Mock()
        self.session.headers = {}
        self.client = MarketplaceClient("http://api.test/api/", session=self.session)

    def test_returns_data_part(self):
        self.session.request.return_value = make_response(200, {"success": True, "data": {"categories": ["Juices"]}})

        assert self.client.list_categories() == ["Juices"]
        args, kwargs = self.session.request.call_args
        assert args == ("GET", "http://api.test/api/categories/")
        assert "Authorization" not in kwargs["headers"]

    def test_login_stores_token_and_sends_it(self):
        self.session.request.return_value = make_response(
            200, {"success": True, "data": {"user": {"id": "u1"}, "token": "abc", "refresh": "def"}}
        )
        self.client.login("buyer@example.com", "secret")

        assert self.client.is_authenticated
        self.session.request.return_value = make_response(200, {"success": True, "data": {"user": {"id": "u1"}}})
        self.client.get_profile()

        _, kwargs = self.session.request.call_args
        assert kwargs["headers"]["Authorization"] == "Bearer abc"

    def test_refresh_token_replaces_access_token(self):
        self.client.token = "expired"
        self.session.request.return_value = make_response(
            200, {"success": True, "data": {"token": "fresh", "access": "fresh"}}
        )

        data = self.client.refresh_token("refresh-abc")

        assert data["token"] == "fresh"
        assert self.client.token == "fresh"
        args, kwargs = self.session.request.call_args
        assert args == ("POST", "http://api.test/api/auth/token/refresh/")
        assert kwargs["json"] == {"refresh": "refresh-abc"}

    def test_unauthorized_clears_token(self):
        self.client.token = "expired"
        self.session.request.return_value = make_response(
            401, {"success": False, "message": "Given token not valid for any token type"}
        )

        with pytest.raises(ApiError) as exc_info:
            self.client.get_cart()

        assert exc_info.value.status == 401
        assert self.client.token is None

    def test_error_envelope_raises_api_error(self):
        self.session.request.return_value = make_response(
            400, {"success": False, "message": "Validation failed", "errors": {"quantity": ["Required"]}}
        )

        with pytest.raises(ApiError) as exc_info:
            self.client.add_to_cart("1b4e28ba-2fa1-11d2-883f-0016d3cca427", quantity=0)

        assert exc_info.value.message == "Validation failed"
        assert exc_info.value.errors == {"quantity": ["Required"]}

    def test_non_json_error(self):
        self.session.request.return_value = make_response(502)

        with pytest.raises(ApiError) as exc_info:
            self.client.list_orders()

        assert exc_info.value.status == 502
        assert exc_info.value.message == "An error occurred"

    def test_network_error(self):
        self.session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(ApiError) as exc_info:
            self.client.list_products()

        assert exc_info.value.status == 0
        assert exc_info.value.message == "Network error. Please check your connection."

    def test_place_order_omits_missing_address(self):
        self.session.request.return_value = make_response(201, {"success": True, "data": {"order": {"id": "o1"}}})

        self.client.place_order("cash_on_delivery")

        _, kwargs = self.session.request.call_args
        assert kwargs["json"] == {"payment_method": "cash_on_delivery", "notes": ""}

    def test_logout(self):
        self.client.token = "abc"

        self.client.logout()

        assert not self.client.is_authenticated

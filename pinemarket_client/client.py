"""
HTTP client for the PineMarket REST API.

Each MarketplaceClient owns one ``requests.Session`` and its own bearer token;
nothing is shared between instances. Successful calls return the ``data`` part
of the response envelope, failures raise ApiError.
"""

import logging
from typing import Any, Dict, Optional

import requests

from .exceptions import ApiError


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


class MarketplaceClient:
    def __init__(self, base_url: str, token: Optional[str] = None, timeout: float = DEFAULT_TIMEOUT, session=None):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json", "Accept": "application/json"})

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.strip('/')}/"

    def request(self, method: str, path: str, params=None, json=None) -> Any:
        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = self.session.request(
                method, self._url(path), params=params, json=json, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.warning(f"{method} {path} failed without a response: {e}")
            raise ApiError("Network error. Please check your connection.", status=0) from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code == 401:
            # Expired or revoked credentials are dropped so the caller signs in again
            self.token = None

        if not response.ok or not isinstance(body, dict) or not body.get("success", False):
            message = body.get("message") if isinstance(body, dict) else None
            raise ApiError(message or "An error occurred", status=response.status_code, data=body)

        return body.get("data")

    def get(self, path, params=None):
        return self.request("GET", path, params=params)

    def post(self, path, json=None):
        return self.request("POST", path, json=json)

    def put(self, path, json=None):
        return self.request("PUT", path, json=json)

    def delete(self, path):
        return self.request("DELETE", path)

    # Auth

    def register(
        self, email, password, first_name, last_name, phone=None, user_type="buyer"
    ) -> Dict[str, Any]:
        payload = {
            "email": email,
            "password": password,
            "first_name": first_name,
            "last_name": last_name,
            "user_type": user_type,
        }
        if phone:
            payload["phone"] = phone
        data = self.post("auth/register", payload)
        self.token = data["token"]
        return data

    def login(self, email, password) -> Dict[str, Any]:
        data = self.post("auth/login", {"email": email, "password": password})
        self.token = data["token"]
        return data

    def refresh_token(self, refresh) -> Dict[str, Any]:
        """Trade a refresh token for a new access token and use it from now on."""
        data = self.post("auth/token/refresh", {"refresh": refresh})
        self.token = data["token"]
        return data

    def logout(self):
        self.token = None

    def get_profile(self):
        return self.get("auth/profile")["user"]

    def update_profile(self, **fields):
        return self.put("auth/profile", fields)["user"]

    # Catalogue

    def list_products(self, **params):
        return self.get("products", params=params)

    def get_product(self, product_id):
        return self.get(f"products/{product_id}")["product"]

    def create_product(self, **fields):
        return self.post("products", fields)["product"]

    def update_product(self, product_id, **fields):
        return self.put(f"products/{product_id}", fields)["product"]

    def delete_product(self, product_id):
        return self.delete(f"products/{product_id}")

    def list_categories(self):
        return self.get("categories")["categories"]

    # Cart

    def get_cart(self):
        return self.get("cart")

    def add_to_cart(self, product_id, quantity=1):
        return self.post("cart", {"product_id": str(product_id), "quantity": quantity})["item"]

    def update_cart_item(self, item_id, quantity):
        return self.put(f"cart/{item_id}", {"quantity": quantity})["item"]

    def remove_cart_item(self, item_id):
        return self.delete(f"cart/{item_id}")

    def clear_cart(self):
        return self.delete("cart")

    # Orders

    def place_order(self, payment_method, shipping_address_id=None, notes=""):
        payload = {"payment_method": payment_method, "notes": notes}
        if shipping_address_id is not None:
            payload["shipping_address_id"] = shipping_address_id
        return self.post("orders", payload)["order"]

    def list_orders(self, **params):
        return self.get("orders", params=params)

    def get_order(self, order_id):
        return self.get(f"orders/{order_id}")["order"]

    # Addresses

    def list_addresses(self):
        return self.get("addresses")["addresses"]

    def add_address(self, **fields):
        return self.post("addresses", fields)["address"]

    def set_default_address(self, address_id):
        return self.put(f"addresses/{address_id}/default")["address"]

    def delete_address(self, address_id):
        return self.delete(f"addresses/{address_id}")

    # Reviews

    def list_product_reviews(self, product_id, **params):
        return self.get(f"reviews/products/{product_id}", params=params)

    def create_review(self, product_id, rating, comment=""):
        return self.post("reviews", {"product_id": str(product_id), "rating": rating, "comment": comment})["review"]

    def update_review(self, review_id, **fields):
        return self.put(f"reviews/{review_id}", fields)["review"]

    def delete_review(self, review_id):
        return self.delete(f"reviews/{review_id}")

    def my_reviews(self, **params):
        return self.get("reviews/user/my-reviews", params=params)

    # Favorites

    def list_favorites(self, **params):
        return self.get("favorites", params=params)

    def add_favorite(self, product_id):
        return self.post("favorites", {"product_id": str(product_id)})

    def remove_favorite(self, product_id):
        return self.delete(f"favorites/{product_id}")

    def is_favorite(self, product_id) -> bool:
        return self.get(f"favorites/check/{product_id}")["is_favorite"]

    def toggle_favorite(self, product_id) -> bool:
        return self.post("favorites/toggle", {"product_id": str(product_id)})["is_favorite"]

    # Seller dashboard

    def seller_stats(self):
        return self.get("sellers/stats")["stats"]

    def seller_orders(self, **params):
        return self.get("sellers/orders", params=params)

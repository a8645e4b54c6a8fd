from __future__ import annotations

import random
import string
import time
from typing import Any, Dict, List, Optional

import requests

from .config import settings


def new_session_id() -> str:
    """Client-side cart token of the form ``session_<millis>_<9 chars>``."""

    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"session_{int(time.time() * 1000)}_{suffix}"


class StorefrontAPIError(Exception):
    def __init__(self, status_code: int, message: str, errors: Optional[List[Dict[str, Any]]] = None) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.errors = errors or []


class StorefrontClient:
    """Call the storefront REST API with a per-client cart session."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        session_id: str | None = None,
        timeout: float = 10.0,
        api_prefix: str | None = None,
    ) -> None:
        prefix = settings.api_prefix if api_prefix is None else api_prefix
        self.base_url = f"{base_url.rstrip('/')}{prefix}"
        self.session_id = session_id or new_session_id()
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers[settings.session_header] = self.session_id

    # Catalog

    def list_categories(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/categories")

    def get_category(self, slug: str) -> Dict[str, Any]:
        return self._request("GET", f"/categories/{slug}")

    def list_medicines(
        self,
        category_id: str | None = None,
        search: str | None = None,
        limit: int | None = None,
    ) -> List[Dict[str, Any]]:
        params = {"category_id": category_id, "search": search, "limit": limit}
        return self._request("GET", "/medicines", params={k: v for k, v in params.items() if v is not None})

    def get_medicine(self, medicine_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/medicines/{medicine_id}")

    # Reviews

    def list_reviews(self, medicine_id: str) -> List[Dict[str, Any]]:
        return self._request("GET", f"/medicines/{medicine_id}/reviews")

    def submit_review(self, medicine_id: str, customer_name: str, rating: int, comment: str) -> Dict[str, Any]:
        body = {"customer_name": customer_name, "rating": rating, "comment": comment}
        return self._request("POST", f"/medicines/{medicine_id}/reviews", json=body)

    # Cart

    def get_cart(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/cart")

    def cart_summary(self) -> Dict[str, Any]:
        return self._request("GET", "/cart/summary")

    def add_to_cart(self, medicine_id: str, quantity: int = 1) -> Dict[str, Any]:
        return self._request("POST", "/cart", json={"medicine_id": medicine_id, "quantity": quantity})

    def update_quantity(self, medicine_id: str, quantity: int) -> Dict[str, Any]:
        return self._request("PUT", f"/cart/{medicine_id}", json={"quantity": quantity})

    def remove_from_cart(self, medicine_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/cart/{medicine_id}")

    def clear_cart(self) -> Dict[str, Any]:
        return self._request("DELETE", "/cart")

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = self._session.request(method=method, url=f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        if response.ok:
            return response.json()

        try:
            body = response.json()
        except ValueError:
            body = {"message": response.text[:500] or response.reason}
        raise StorefrontAPIError(response.status_code, body.get("message", ""), body.get("errors"))

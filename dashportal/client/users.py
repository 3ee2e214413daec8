"""
Users resource client.
"""

from __future__ import annotations

from typing import List

from dashportal.client.base import BaseHTTPClient, expect_array, expect_envelope_array, validate_items
from dashportal.models.domain import User, UserCreate


class UsersClient:
    def __init__(self, http: BaseHTTPClient):
        self._http = http

    def list(self) -> List[User]:
        payload = self._http._request("GET", "/users")
        items = expect_array(payload, "GET /users")
        return validate_items(User, items, "GET /users")

    def list_inactive(self) -> List[User]:
        """Users the backend reports as inactive beyond its threshold."""
        payload = self._http._request("GET", "/users/inativos")
        items = expect_envelope_array(payload, "GET /users/inativos")
        return validate_items(User, items, "GET /users/inativos")

    def create(self, user: UserCreate) -> None:
        self._http._request("POST", "/users", json=user.to_payload())

    def update(self, user_id: str, user: UserCreate) -> None:
        self._http._request("PUT", f"/users/{user_id}", json=user.to_payload())

    def delete(self, user_id: str) -> None:
        self._http._request("DELETE", f"/users/{user_id}")

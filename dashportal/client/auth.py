"""
Sign-in exchange client.
"""

from __future__ import annotations

from dashportal.client.base import BaseHTTPClient, ResponseShapeError, validate_item
from dashportal.models.domain import IdentityRecord


class AuthClient:
    def __init__(self, http: BaseHTTPClient):
        self._http = http

    def exchange(self, id_token: str) -> IdentityRecord:
        """Trade an identity-provider ID token for the portal's identity record."""
        payload = self._http._request(
            "POST",
            "/auth/sso-firebase",
            json={"firebaseIdToken": id_token},
        )
        if not isinstance(payload, dict) or not isinstance(payload.get("user"), dict):
            raise ResponseShapeError(
                status_code=200,
                message="POST /auth/sso-firebase: expected an object with 'user'",
            )
        return validate_item(IdentityRecord, payload["user"], "POST /auth/sso-firebase")

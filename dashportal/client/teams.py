"""
Teams resource client.
"""

from __future__ import annotations

from typing import List

from dashportal.client.base import BaseHTTPClient, expect_envelope_array, validate_items
from dashportal.models.domain import Team, TeamCreate


class TeamsClient:
    def __init__(self, http: BaseHTTPClient):
        self._http = http

    def list(self) -> List[Team]:
        payload = self._http._request("GET", "/teams")
        items = expect_envelope_array(payload, "GET /teams")
        return validate_items(Team, items, "GET /teams")

    def create(self, team: TeamCreate) -> None:
        self._http._request("POST", "/teams", json=team.to_payload())

    def update(self, team_id: str, team: TeamCreate) -> None:
        self._http._request("PUT", f"/teams/{team_id}", json=team.to_payload())

    def deactivate(self, team_id: str) -> None:
        """Soft delete: the backend flips isActive and keeps the record."""
        self._http._request("DELETE", f"/teams/{team_id}")

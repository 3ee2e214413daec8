"""
Dashboards and dashboard-access resource client.
"""

from __future__ import annotations

from typing import Any, List, Optional

from dashportal.client.base import (
    BaseHTTPClient,
    ResponseShapeError,
    expect_envelope,
    expect_envelope_array,
    validate_item,
    validate_items,
)
from dashportal.models.domain import (
    AccessGrant,
    AccessTarget,
    Dashboard,
    DashboardCreate,
    DashboardUpdate,
)


class DashboardsClient:
    def __init__(self, http: BaseHTTPClient):
        self._http = http

    def list(self) -> List[Dashboard]:
        payload = self._http._request("GET", "/dashboard")
        items = expect_envelope_array(payload, "GET /dashboard")
        return validate_items(Dashboard, items, "GET /dashboard")

    def create(self, dashboard: DashboardCreate) -> None:
        payload = self._http._request("POST", "/dashboard", json=dashboard.to_payload())
        expect_envelope(payload, "POST /dashboard")

    def update(self, dashboard_id: str, dashboard: DashboardUpdate) -> None:
        payload = self._http._request(
            "PUT",
            f"/dashboards/{dashboard_id}",
            json=dashboard.to_payload(),
        )
        expect_envelope(payload, "PUT /dashboards")

    def delete(self, dashboard_id: str) -> None:
        payload = self._http._request("DELETE", f"/dashboards/{dashboard_id}")
        if payload is not None:
            expect_envelope(payload, "DELETE /dashboards")


class DashboardAccessClient:
    def __init__(self, http: BaseHTTPClient):
        self._http = http

    def list(self, dashboard_id: Optional[str] = None) -> List[AccessGrant]:
        """All grants in one request, or the grants of a single dashboard."""
        params = {"dashboardId": dashboard_id} if dashboard_id else None
        payload = self._http._request("GET", "/dashboard/access", params=params)
        items = expect_envelope_array(payload, "GET /dashboard/access")
        grants = []
        for item in items:
            if isinstance(item, str) and dashboard_id:
                # Per-dashboard lookups may return bare grantee strings
                grants.append(AccessGrant(dashboard_id=dashboard_id, target=AccessTarget.parse(item)))
            else:
                grants.append(validate_item(AccessGrant, item, "GET /dashboard/access"))
        return grants

    def grant(self, dashboard_id: str, target: AccessTarget) -> Optional[List[AccessTarget]]:
        """Create a grant. Returns the server-confirmed access list when echoed."""
        payload = self._http._request(
            "POST",
            "/dashboard/access",
            json={"dashboardID": dashboard_id, **target.to_payload()},
        )
        return _echoed_access(payload, "POST /dashboard/access")

    def revoke(self, dashboard_id: str, target: AccessTarget) -> Optional[List[AccessTarget]]:
        """Delete a grant. Returns the server-confirmed access list when echoed."""
        payload = self._http._request(
            "DELETE",
            "/dashboard/access",
            json={"dashboardID": dashboard_id, **target.to_payload()},
        )
        return _echoed_access(payload, "DELETE /dashboard/access")


def _echoed_access(payload: Any, endpoint: str) -> Optional[List[AccessTarget]]:
    if payload is None:
        return None
    data = expect_envelope(payload, endpoint)
    if not isinstance(data, dict) or "access" not in data:
        return None
    access = data["access"]
    if not isinstance(access, list):
        raise ResponseShapeError(status_code=200, message=f"{endpoint}: 'access' must be an array")
    return validate_item(Dashboard, {"id": data.get("id", ""), "access": access}, endpoint).access

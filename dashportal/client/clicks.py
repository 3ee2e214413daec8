"""
Click-event resource client.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from dashportal.client.base import BaseHTTPClient, expect_envelope_array, validate_items
from dashportal.models.domain import ClickEvent


class ClicksClient:
    def __init__(self, http: BaseHTTPClient):
        self._http = http

    def list(self, start_date: date, end_date: date) -> List[ClickEvent]:
        payload = self._http._request(
            "GET",
            "/dashboard/clicks",
            params={"startDate": start_date.isoformat(), "endDate": end_date.isoformat()},
        )
        items = expect_envelope_array(payload, "GET /dashboard/clicks")
        return validate_items(ClickEvent, items, "GET /dashboard/clicks")

    def track(self, dashboard_id: str, user_email: str, dashboard_title: Optional[str] = None) -> None:
        self._http._request(
            "POST",
            "/dashboard/click",
            json={
                "dashboardID": dashboard_id,
                "userEmail": user_email,
                "dashboardTitle": dashboard_title,
            },
        )

from __future__ import annotations

from datetime import date

import httpx

from dashportal.analysis.clicks import TimeRange
from dashportal.client import PortalClient
from dashportal.models.domain import Dashboard
from dashportal.services.clicks import load_clicks, track_click


def test_track_click_posts_event(backend, client, read_body):
    backend.on("POST", "/dashboard/click", status=201)
    assert track_click(client, Dashboard(id="d1", title="Sales"), "a@x.com")
    assert read_body(backend.requests[0]) == {"dashboardID": "d1", "userEmail": "a@x.com", "dashboardTitle": "Sales"}


def test_track_click_never_raises():
    def handler(request):
        raise httpx.ConnectError("down", request=request)

    with PortalClient("http://portal.test", transport=httpx.MockTransport(handler)) as client:
        assert track_click(client, Dashboard(id="d1", title="Sales"), "a@x.com") is False


def test_load_clicks_window(backend, client):
    backend.on("GET", "/dashboard/clicks", body={"success": True, "data": []})
    loaded = load_clicks(client, TimeRange.LAST_7_DAYS, today=date(2024, 5, 10))
    params = backend.requests[0].url.params
    assert (params["startDate"], params["endDate"]) == ("2024-05-03", "2024-05-10")
    assert loaded.events == []
    assert loaded.error is None


def test_load_clicks_failure(backend, client):
    backend.on("GET", "/dashboard/clicks", status=500, body={"message": "boom"})
    loaded = load_clicks(client, TimeRange.LAST_90_DAYS)
    assert loaded.events == []
    assert "boom" in loaded.error


def test_load_clicks_with_unparseable_timestamp(backend, client):
    backend.on(
        "GET",
        "/dashboard/clicks",
        body={"success": True, "data": [{"dashboardId": "d1", "userEmail": "a@x.com", "timestamp": "yesterday"}]},
    )
    loaded = load_clicks(client, TimeRange.LAST_7_DAYS)
    assert loaded.events == []
    assert loaded.error

from __future__ import annotations

import json
from datetime import datetime, timezone

import httpx
import pytest

from dashportal.client import PortalClient
from dashportal.models.domain import AccessLevel, AccessTarget, Dashboard, User
from dashportal.services.panels import (
    ERROR,
    SILENT,
    SUCCESS,
    DashboardPanel,
    TeamPanel,
    UserPanel,
    ValidationFailure,
)


class _TeamStore:
    """In-memory /teams backend."""

    def __init__(self):
        self.teams = []
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append((request.method, request.url.path))
        path = request.url.path
        if request.method == "GET" and path == "/teams":
            return httpx.Response(200, json={"success": True, "data": self.teams})
        if request.method == "POST" and path == "/teams":
            body = json.loads(request.content)
            team = {"id": f"t{len(self.teams) + 1}", "isActive": True, **body}
            self.teams.append(team)
            return httpx.Response(201, json=team)
        team_id = path.rsplit("/", 1)[-1]
        team = next((t for t in self.teams if t["id"] == team_id), None)
        if team is None:
            return httpx.Response(404, json={"message": "team not found"})
        if request.method == "PUT":
            team.update(json.loads(request.content))
            return httpx.Response(200, json=team)
        if request.method == "DELETE":
            team["isActive"] = False
            return httpx.Response(204)
        return httpx.Response(405)


@pytest.fixture
def team_store():
    return _TeamStore()


@pytest.fixture
def team_panel(team_store):
    with PortalClient("http://portal.test", transport=httpx.MockTransport(team_store)) as client:
        yield TeamPanel(client, actor="admin@x.com")


def test_team_create_then_list_contains_it(team_panel, team_store):
    outcome = team_panel.create({"name": "Ops", "description": "Operations"})
    assert outcome.level == SUCCESS
    assert [t.name for t in team_panel.items] == ["Ops"]
    assert team_store.requests == [("POST", "/teams"), ("GET", "/teams")]


def test_team_delete_is_soft(team_panel):
    team_panel.create({"name": "Ops"})
    team_id = team_panel.items[0].id

    outcome = team_panel.delete(team_id)

    assert outcome.level == SUCCESS
    assert len(team_panel.items) == 1
    assert team_panel.items[0].is_active is False
    assert team_panel.active_names() == []


def test_team_update(team_panel):
    team_panel.create({"name": "Ops"})
    team_id = team_panel.items[0].id
    assert team_panel.update(team_id, {"name": "Operations"}).ok
    assert team_panel.items[0].name == "Operations"


@pytest.mark.parametrize("fields", [{}, {"name": ""}, {"name": "   "}, {"name": None}])
def test_blank_required_field_blocks_request(team_panel, team_store, fields):
    outcome = team_panel.create(fields)
    assert outcome.level == ERROR
    assert "name" in outcome.message
    assert team_store.requests == []


def test_validate_lists_missing_fields(backend, client):
    panel = UserPanel(client)
    with pytest.raises(ValidationFailure) as exc_info:
        panel.validate({"name": "Ana", "email": " "})
    assert exc_info.value.missing == ["email", "access_level", "team"]


def test_list_failure_sets_error(backend, client):
    backend.on("GET", "/teams", status=503, body={"message": "unavailable"})
    panel = TeamPanel(client)
    outcome = panel.list()
    assert outcome.level == ERROR
    assert panel.items == []
    assert "unavailable" in panel.error


def test_list_success_is_silent(team_panel):
    assert team_panel.list().level == SILENT


def test_mutation_failure_is_reported(team_panel, team_store):
    outcome = team_panel.update("missing", {"name": "X"})
    assert outcome.level == ERROR
    assert outcome.message == "team not found"


def test_user_hard_delete_requires_confirmation(backend, client):
    backend.on("DELETE", "/users/u1", status=204)
    backend.on("GET", "/users", body=[])
    panel = UserPanel(client)

    refused = panel.delete("u1")
    assert refused.level == ERROR
    assert backend.requests == []

    assert panel.delete("u1", confirm=True).level == SUCCESS
    assert [r.method for r in backend.requests] == ["DELETE", "GET"]


def test_invalid_access_level_is_error_without_request(backend, client):
    panel = UserPanel(client)
    outcome = panel.create({"name": "A", "email": "a@x.com", "access_level": "Root", "team": "Ops"})
    assert outcome.level == ERROR
    assert backend.requests == []


def _user(uid, name, email, level="User", created=None):
    return User(id=uid, name=name, email=email, access_level=AccessLevel(level), team="Ops", created_at=created)


def test_user_filter_and_sort(client):
    panel = UserPanel(client)
    panel.items = [
        _user("1", "carla", "c@x.com", "Admin", datetime(2024, 1, 3, tzinfo=timezone.utc)),
        _user("2", "Ana", "a@x.com", "User", datetime(2024, 1, 1, tzinfo=timezone.utc)),
        _user("3", "bruno", "b@corp.com", "User", None),
    ]
    assert [u.id for u in panel.view()] == ["2", "3", "1"]
    assert [u.id for u in panel.view("X.COM")] == ["2", "1"]
    assert [u.id for u in panel.view(access_level="User")] == ["2", "3"]
    assert [u.id for u in panel.sort("newest")] == ["1", "2", "3"]
    assert [u.id for u in panel.sort("oldest")] == ["3", "2", "1"]


def test_sort_ties_keep_fetch_order(client):
    panel = UserPanel(client)
    panel.items = [_user("1", "Sam", "s1@x.com"), _user("2", "sam", "s2@x.com"), _user("3", "Al", "a@x.com")]
    assert [u.id for u in panel.sort("name")] == ["3", "1", "2"]
    assert [u.id for u in panel.sort("access_level")] == ["1", "2", "3"]


def test_dashboard_filter_covers_access_values(client):
    panel = DashboardPanel(client)
    panel.items = [
        Dashboard(id="d1", title="Sales", access=[AccessTarget.team("Ops")]),
        Dashboard(id="d2", title="Finance", description="quarterly ops review"),
        Dashboard(id="d3", title="HR", access=[AccessTarget.email("x@y.com"), AccessTarget.team("HR")]),
    ]
    assert [d.id for d in panel.filter("ops")] == ["d1", "d2"]
    assert [d.id for d in panel.sort("most_access")] == ["d3", "d1", "d2"]
    assert [d.id for d in panel.sort("least_access")] == ["d2", "d1", "d3"]
    assert [d.id for d in panel.filter("")] == ["d1", "d2", "d3"]


def test_dashboard_create_requires_title_and_url(backend, client):
    panel = DashboardPanel(client)
    outcome = panel.create({"title": "Sales", "url": ""})
    assert outcome.level == ERROR
    assert backend.requests == []


def test_dashboard_create_refetches_annotated_list(backend, client, read_body):
    backend.on("POST", "/dashboard", body={"success": True, "data": {"id": "d1"}})
    backend.on("GET", "/dashboard", body={"success": True, "data": [{"id": "d1", "title": "Sales", "url": "http://s"}]})
    backend.on("GET", "/dashboard/access", body={"success": True, "data": [{"dashboardId": "d1", "team": "Ops"}]})
    panel = DashboardPanel(client, actor="admin@x.com")

    outcome = panel.create({"title": " Sales ", "url": "http://s", "description": ""})

    assert outcome.level == SUCCESS
    assert read_body(backend.calls("POST", "/dashboard")[0]) == {"title": "Sales", "url": "http://s"}
    assert panel.items[0].access == [AccessTarget.team("Ops")]


def test_dashboard_grant_replaces_item(backend, client):
    backend.on("POST", "/dashboard/access", body={"success": True, "data": {"access": ["Ops"]}})
    panel = DashboardPanel(client)
    panel.items = [Dashboard(id="d1", title="Sales"), Dashboard(id="d2", title="HR")]

    outcome = panel.grant("d1", AccessTarget.team("Ops"))

    assert outcome.ok
    assert panel.items[0].access == [AccessTarget.team("Ops")]
    assert panel.items[1].access == []


def test_dashboard_grant_unknown_id(client):
    panel = DashboardPanel(client)
    assert not panel.grant("nope", AccessTarget.team("Ops")).ok


def test_malformed_user_row_is_error_outcome(backend, client):
    backend.on("GET", "/users", body=[{"id": "u1", "name": "Ana", "email": "a@x.com", "accessLevel": "Viewer"}])
    panel = UserPanel(client)
    outcome = panel.list()
    assert outcome.level == ERROR
    assert panel.items == []
    assert "accessLevel" in panel.error

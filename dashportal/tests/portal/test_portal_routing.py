from __future__ import annotations

import pytest

from dashportal.auth.session import Session
from scripts.portal.core.auth import check_authentication
from scripts.portal.core.routing import resolve_route
from scripts.portal.core.sidebar import visible_routes

ANON = Session()
USER = Session(email="u@x.com", access_level="User", team="Ops")
ADMIN = Session(email="a@x.com", access_level="Admin")


@pytest.mark.parametrize(
    "requested,session,expected",
    [
        ("/dashboard-admin", ANON, "/login"),
        ("/dashboard", ANON, "/login"),
        ("/login", ANON, "/login"),
        ("/login", USER, "/dashboard"),
        ("/teams", USER, "/dashboard"),
        ("/dashboard-analytics", USER, "/dashboard"),
        ("/teams", ADMIN, "/teams"),
        ("/nowhere", ANON, "/login"),
        ("", ADMIN, "/dashboard"),
    ],
)
def test_resolve_route(requested, session, expected):
    assert resolve_route(requested, session) == expected


def test_visible_routes_by_role():
    assert visible_routes(ANON) == []
    assert visible_routes(USER) == ["/dashboard"]
    assert visible_routes(ADMIN) == [
        "/dashboard",
        "/dashboard-admin",
        "/teams",
        "/user-settings",
        "/dashboard-analytics",
    ]


def test_disabled_auth_signs_in_local_admin(session_state):
    session = check_authentication(auth_disabled=True)
    assert session.is_admin
    assert session_state["userEmail"] == "dev@local"


def test_enabled_auth_leaves_session_empty(session_state):
    assert not check_authentication(auth_disabled=False).is_authenticated

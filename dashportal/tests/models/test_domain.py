from __future__ import annotations

from datetime import datetime, timezone

import pytest

from dashportal.models.domain import (
    AccessGrant,
    AccessLevel,
    AccessTarget,
    ClickEvent,
    Dashboard,
    Principal,
    coerce_timestamp,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("2024-03-01T12:00:00Z", datetime(2024, 3, 1, 12, tzinfo=timezone.utc)),
        ("2024-03-01T12:00:00", datetime(2024, 3, 1, 12, tzinfo=timezone.utc)),
        (0, datetime(1970, 1, 1, tzinfo=timezone.utc)),
        ({"_seconds": 60, "_nanoseconds": 0}, datetime(1970, 1, 1, 0, 1, tzinfo=timezone.utc)),
        ({"seconds": 60}, datetime(1970, 1, 1, 0, 1, tzinfo=timezone.utc)),
        (None, None),
        ("", None),
    ],
)
def test_coerce_timestamp(raw, expected):
    assert coerce_timestamp(raw) == expected


def test_coerce_timestamp_rejects_unknown_object():
    with pytest.raises(ValueError):
        coerce_timestamp({"when": 1})


def test_access_target_parse():
    assert AccessTarget.parse(" a@x.com ") == AccessTarget.email("a@x.com")
    assert AccessTarget.parse("Ops") == AccessTarget.team("Ops")
    assert AccessTarget.team("Ops").to_payload() == {"team": "Ops"}


def test_dashboard_collects_both_grant_schemes():
    dash = Dashboard.model_validate(
        {
            "id": "d1",
            "title": "Sales",
            "access": ["Ops", {"team": "Ops"}, {"email": "b@x.com"}],
            "emailsWithAccess": ["a@x.com", "b@x.com"],
        }
    )
    assert dash.access == [
        AccessTarget.team("Ops"),
        AccessTarget.email("b@x.com"),
        AccessTarget.email("a@x.com"),
    ]


def test_principal_matches_email_or_team():
    dash = Dashboard(id="d1", title="T", access=[AccessTarget.team("Ops")])
    assert Principal(email="u@x.com", team="Ops").can_open(dash)
    assert not Principal(email="u@x.com", team="Sales").can_open(dash)
    assert Principal(email="u@x.com", role=AccessLevel.ADMIN).is_admin
    assert Principal(email="u@x.com").can_open(dash.with_access([AccessTarget.email("u@x.com")]))


def test_access_grant_from_row():
    grant = AccessGrant.model_validate({"dashboardID": 5, "email": "a@x.com"})
    assert grant.dashboard_id == "5"
    assert grant.target == AccessTarget.email("a@x.com")


def test_click_label_prefers_title():
    event = ClickEvent.model_validate({"dashboardId": "d1", "dashboardTitle": "Sales", "timestamp": 0})
    assert event.label == "Sales"

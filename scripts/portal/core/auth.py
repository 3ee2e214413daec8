"""Authentication helpers for the portal."""

from __future__ import annotations

from dashportal.auth.session import Session, get_session, set_session
from dashportal.models.domain import AccessLevel


def get_mock_user() -> dict:
    return {
        "email": "dev@local",
        "access_level": AccessLevel.ADMIN.value,
        "team": "Dev",
        "name": "Developer",
        "photo_url": "",
    }


def check_authentication(auth_disabled: bool) -> Session:
    """Current session; with auth disabled a local admin is signed in automatically."""
    session = get_session()
    if auth_disabled and not session.is_authenticated:
        session = set_session(get_mock_user())
    return session

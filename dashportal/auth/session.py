"""Streamlit session management for the signed-in user."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Protocol

import streamlit as st

from dashportal.models.domain import AccessLevel, Principal

# One key per field, written together at login and removed together at logout
SESSION_KEYS = {
    "email": "userEmail",
    "access_level": "accessLevel",
    "team": "team",
    "name": "name",
    "photo_url": "photoUrl",
}


@dataclass(frozen=True)
class Session:
    """Snapshot of the stored session; empty strings for missing fields."""

    email: str = ""
    access_level: str = ""
    team: str = ""
    name: str = ""
    photo_url: str = ""

    @property
    def is_authenticated(self) -> bool:
        return bool(self.email)

    @property
    def is_admin(self) -> bool:
        return self.access_level == AccessLevel.ADMIN.value

    def principal(self) -> Optional[Principal]:
        if not self.email:
            return None
        role = AccessLevel.ADMIN if self.is_admin else AccessLevel.USER
        return Principal(email=self.email, role=role, team=self.team or None)


class IdentityWidget(Protocol):
    """Client-side identity provider hook invoked on logout."""

    def disable_auto_select(self) -> None:
        ...


def set_session(fields: Mapping[str, Optional[str]]) -> Session:
    """Write all five session fields; absent values are stored as empty strings."""
    session = Session(**{name: str(fields.get(name) or "") for name in SESSION_KEYS})
    for name, key in SESSION_KEYS.items():
        st.session_state[key] = getattr(session, name)
    return session


def get_session() -> Session:
    """Read the stored session."""
    return Session(**{name: str(st.session_state.get(key) or "") for name, key in SESSION_KEYS.items()})


def clear_session(identity_widget: Optional[IdentityWidget] = None) -> None:
    """Remove every session key (logout) and stop silent re-authentication."""
    for key in SESSION_KEYS.values():
        st.session_state.pop(key, None)
    if identity_widget is not None:
        identity_widget.disable_auto_select()


def is_authenticated() -> bool:
    """Check if a user is signed in."""
    return get_session().is_authenticated

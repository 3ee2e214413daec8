"""
Route access decisions.

Every function here is pure: the outcome depends only on the required role
and the session value passed in.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from dashportal.auth.session import Session
from dashportal.models.domain import AccessLevel

LOGIN_ROUTE = "/login"
USER_LANDING_ROUTE = "/dashboard"


class GuardState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED_USER = "authenticated_user"
    AUTHENTICATED_ADMIN = "authenticated_admin"


@dataclass(frozen=True)
class GuardDecision:
    allowed: bool
    redirect_to: Optional[str] = None

    @classmethod
    def render(cls) -> "GuardDecision":
        return cls(allowed=True)

    @classmethod
    def redirect(cls, route: str) -> "GuardDecision":
        return cls(allowed=False, redirect_to=route)


def classify(session: Session) -> GuardState:
    if not session.email:
        return GuardState.UNAUTHENTICATED
    if session.access_level == AccessLevel.ADMIN.value:
        return GuardState.AUTHENTICATED_ADMIN
    return GuardState.AUTHENTICATED_USER


def evaluate(required_role: Optional[AccessLevel], session: Session) -> GuardDecision:
    """
    Decide whether a protected route renders for this session.

    Args:
        required_role: AccessLevel.ADMIN for admin-only routes; USER or None otherwise
        session: The current session value

    Returns:
        GuardDecision to render, or to redirect to the login or landing route
    """
    state = classify(session)
    if state == GuardState.UNAUTHENTICATED:
        return GuardDecision.redirect(LOGIN_ROUTE)
    if required_role == AccessLevel.ADMIN and state != GuardState.AUTHENTICATED_ADMIN:
        return GuardDecision.redirect(USER_LANDING_ROUTE)
    return GuardDecision.render()


def evaluate_login_route(session: Session) -> GuardDecision:
    """The login route is only reachable while signed out."""
    if session.email:
        return GuardDecision.redirect(USER_LANDING_ROUTE)
    return GuardDecision.render()


def resolve_unknown_path(session: Session) -> str:
    return USER_LANDING_ROUTE if session.email else LOGIN_ROUTE

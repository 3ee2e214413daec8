"""Authentication and route-access utilities."""
from dashportal.auth.session import Session, get_session, set_session, clear_session, is_authenticated
from dashportal.auth.guard import (
    GuardDecision,
    GuardState,
    LOGIN_ROUTE,
    USER_LANDING_ROUTE,
    classify,
    evaluate,
    evaluate_login_route,
    resolve_unknown_path,
)
from dashportal.auth.sso import complete_sign_in, sign_out

__all__ = [
    "Session",
    "get_session",
    "set_session",
    "clear_session",
    "is_authenticated",
    "GuardDecision",
    "GuardState",
    "LOGIN_ROUTE",
    "USER_LANDING_ROUTE",
    "classify",
    "evaluate",
    "evaluate_login_route",
    "resolve_unknown_path",
    "complete_sign_in",
    "sign_out",
]

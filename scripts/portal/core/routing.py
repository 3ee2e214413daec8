"""Guarded routing for portal pages."""

from __future__ import annotations

import importlib
import logging

import streamlit as st

from dashportal.auth.guard import LOGIN_ROUTE, evaluate, evaluate_login_route, resolve_unknown_path
from dashportal.auth.session import Session

from .config import PAGE_REGISTRY

logger = logging.getLogger(__name__)


def current_route() -> str:
    raw = st.query_params.get("page", "")
    route = str(raw).strip() if raw else ""
    if route and not route.startswith("/"):
        route = f"/{route}"
    return route


def navigate(route: str) -> None:
    st.query_params["page"] = route
    st.rerun()


def resolve_route(route: str, session: Session) -> str:
    """Follow guard redirects until a renderable route is reached."""
    for _ in range(len(PAGE_REGISTRY) + 1):
        entry = PAGE_REGISTRY.get(route)
        if entry is None:
            route = resolve_unknown_path(session)
            continue
        required_role = entry[2]
        if route == LOGIN_ROUTE:
            decision = evaluate_login_route(session)
        else:
            decision = evaluate(required_role, session)
        if decision.allowed:
            return route
        logger.info(f"Redirecting {route} -> {decision.redirect_to}")
        route = decision.redirect_to or resolve_unknown_path(session)
    return resolve_unknown_path(session)


def route_to_page(route: str, session: Session) -> None:
    module_path, func_name, _ = PAGE_REGISTRY[route]
    try:
        module = importlib.import_module(module_path)
        render_func = getattr(module, func_name, None)
        if not render_func:
            raise AttributeError(f"{func_name} not found in {module_path}")
        render_func(session)
    except ImportError as e:
        st.error(f"❌ Error loading page: {route}")
        st.error(f"Import error: {str(e)}")
        with st.expander("Show full error details"):
            st.exception(e)
    except Exception as e:
        logger.exception(f"Error rendering {route}")
        st.error(f"❌ Error rendering page: {route}")
        st.exception(e)

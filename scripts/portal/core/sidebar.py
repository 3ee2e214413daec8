"""Sidebar rendering and navigation."""

from __future__ import annotations

from typing import Iterable, List, Optional

import streamlit as st

from dashportal.auth.guard import evaluate
from dashportal.auth.session import IdentityWidget, Session
from dashportal.auth.sso import sign_out

from .config import NAV_ORDER, PAGE_LABELS, PAGE_REGISTRY


def visible_routes(session: Session, routes: Iterable[str] = NAV_ORDER) -> List[str]:
    """Routes the guard would render for this session."""
    return [r for r in routes if evaluate(PAGE_REGISTRY[r][2], session).allowed]


def render_user_info(session: Session, identity_widget: Optional[IdentityWidget] = None) -> None:
    if not session.is_authenticated:
        return
    display_name = session.name or session.email
    col1, col2 = st.columns([1, 3])
    with col1:
        if session.photo_url:
            st.image(session.photo_url, width=40)
        else:
            st.markdown(f"### {display_name[:1].upper()}")
    with col2:
        st.markdown(f"**{display_name}**")
        st.caption(f"{session.access_level}{' · ' + session.team if session.team else ''}")
    if st.button("Logout", key="logout_btn"):
        sign_out(identity_widget)
        st.query_params.clear()
        st.rerun()
    st.divider()


def render_sidebar(session: Session, current: str, identity_widget: Optional[IdentityWidget] = None) -> Optional[str]:
    """
    Render the profile block and navigation.

    Returns:
        The route selected by a navigation click, or None if nothing was clicked
    """
    selected = None
    with st.sidebar:
        st.markdown("## 📊 Dashboard Portal")
        render_user_info(session, identity_widget)
        for route in visible_routes(session):
            label = PAGE_LABELS.get(route, route)
            if st.button(
                label,
                key=f"nav_{route}",
                use_container_width=True,
                type="primary" if route == current else "secondary",
            ):
                selected = route
    return selected

"""My Dashboards - every dashboard the signed-in user may open."""
import streamlit as st
import streamlit.components.v1 as components

from dashportal.auth.session import Session
from dashportal.models.domain import Dashboard
from dashportal.services.clicks import track_click
from dashportal.services.entitlements import EntitlementResolver
from scripts.portal.utils.client import get_client

_OPEN_KEY = "open_dashboard_id"
COLUMNS = 3


def _render_card(dashboard: Dashboard, session: Session) -> None:
    with st.container(border=True):
        if dashboard.thumbnail:
            st.image(dashboard.thumbnail, use_container_width=True)
        st.markdown(f"**{dashboard.title}**")
        if dashboard.description:
            st.caption(dashboard.description)
        if st.button("Open", key=f"open_{dashboard.id}", use_container_width=True):
            track_click(get_client(), dashboard, session.email)
            st.session_state[_OPEN_KEY] = dashboard.id
            st.rerun()


def _render_viewer(dashboard: Dashboard) -> None:
    col1, col2 = st.columns([4, 1])
    with col1:
        st.subheader(dashboard.title)
    with col2:
        if st.button("⬅ Back", key="close_dashboard"):
            st.session_state.pop(_OPEN_KEY, None)
            st.rerun()
    st.link_button("Open in new tab", dashboard.url)
    components.iframe(dashboard.url, height=800, scrolling=True)


def render_user_dashboard_page(session: Session):
    st.title("📊 My Dashboards")

    result = EntitlementResolver(get_client(), actor=session.email).list_dashboards_for(session.principal())
    if not result.ok:
        st.error(result.error)
        return

    open_id = st.session_state.get(_OPEN_KEY)
    opened = next((d for d in result.dashboards if d.id == open_id), None)
    if opened is not None:
        _render_viewer(opened)
        return

    if not result.dashboards:
        st.info("No dashboards have been shared with you or your team yet.")
        return

    cols = st.columns(COLUMNS)
    for i, dashboard in enumerate(result.dashboards):
        with cols[i % COLUMNS]:
            _render_card(dashboard, session)

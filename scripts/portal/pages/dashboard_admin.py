"""Manage Dashboards - Admin only."""
from typing import List

import streamlit as st

from dashportal.auth.session import Session
from dashportal.client import APIError
from dashportal.models.domain import AccessTarget, Dashboard
from dashportal.services.entitlements import available_targets, candidate_targets
from dashportal.services.panels import ERROR, SUCCESS, DashboardPanel, PanelOutcome, TeamPanel
from scripts.portal.utils.client import get_client
from scripts.portal.utils.errors import flash, render_api_error, render_flash

SORT_LABELS = {
    "title": "Title (A-Z)",
    "newest": "Newest first",
    "oldest": "Oldest first",
    "most_access": "Most access",
    "least_access": "Least access",
}


def _load_candidates(panel: DashboardPanel) -> List[AccessTarget]:
    client = get_client()
    teams = TeamPanel(client, actor=panel.actor)
    teams.list()
    try:
        users = client.users.list()
    except APIError as e:
        render_api_error(e, service="Users API")
        users = []
    return candidate_targets(users, teams.active_names())


def _render_create_form(panel: DashboardPanel) -> None:
    with st.expander("➕ New dashboard"):
        with st.form("create_dashboard", clear_on_submit=True):
            title = st.text_input("Title *")
            url = st.text_input("URL *")
            description = st.text_area("Description")
            thumbnail = st.text_input("Thumbnail URL")
            if st.form_submit_button("Create", type="primary"):
                outcome = panel.create({"title": title, "url": url, "description": description, "thumbnail": thumbnail})
                if outcome.level == SUCCESS:
                    flash(outcome)
                    st.rerun()
                st.error(outcome.message)


def _render_access(panel: DashboardPanel, dashboard: Dashboard, candidates: List[AccessTarget]) -> None:
    st.markdown("**Access**")
    if not dashboard.access:
        st.caption("Nobody has access yet.")
    for target in dashboard.access:
        col1, col2 = st.columns([5, 1])
        with col1:
            st.markdown(f"{'📧' if target.kind == 'email' else '👥'} {target.label}")
        with col2:
            if st.button("✕", key=f"revoke_{dashboard.id}_{target.kind}_{target.value}", help="Remove access"):
                outcome = panel.revoke(dashboard.id, target)
                flash(PanelOutcome(SUCCESS if outcome.ok else ERROR, outcome.message))
                st.rerun()

    options = available_targets(dashboard, candidates)
    if not options:
        return
    col1, col2 = st.columns([5, 1])
    with col1:
        choice = st.selectbox(
            "Grant access to",
            options,
            format_func=lambda t: f"{'📧' if t.kind == 'email' else '👥'} {t.label}",
            key=f"grant_select_{dashboard.id}",
        )
    with col2:
        st.write("")
        if st.button("Add", key=f"grant_{dashboard.id}"):
            outcome = panel.grant(dashboard.id, choice)
            flash(PanelOutcome(SUCCESS if outcome.ok else ERROR, outcome.message))
            st.rerun()


def _render_row(panel: DashboardPanel, dashboard: Dashboard, candidates: List[AccessTarget]) -> None:
    with st.expander(f"{dashboard.title}  ·  {len(dashboard.access)} with access"):
        with st.form(f"edit_{dashboard.id}"):
            title = st.text_input("Title *", value=dashboard.title)
            url = st.text_input("URL *", value=dashboard.url)
            description = st.text_area("Description", value=dashboard.description or "")
            if st.form_submit_button("Save"):
                outcome = panel.update(dashboard.id, {"title": title, "url": url, "description": description})
                if outcome.level == SUCCESS:
                    flash(outcome)
                    st.rerun()
                st.error(outcome.message)

        _render_access(panel, dashboard, candidates)

        st.divider()
        confirm = st.checkbox("I understand this cannot be undone", key=f"confirm_delete_{dashboard.id}")
        if st.button("🗑️ Delete dashboard", key=f"delete_{dashboard.id}", disabled=not confirm):
            outcome = panel.delete(dashboard.id, confirm=confirm)
            flash(outcome)
            st.rerun()


def render_dashboard_admin_page(session: Session):
    st.title("🛠️ Manage Dashboards")
    render_flash()

    panel = DashboardPanel(get_client(), actor=session.email)
    loaded = panel.list()
    if loaded.level == ERROR:
        st.error(loaded.message)
        return

    _render_create_form(panel)

    col1, col2, col3 = st.columns([3, 2, 1])
    with col1:
        term = st.text_input("🔍 Search", key="dashboard_search", placeholder="Title, description, team or email")
    with col2:
        sort_key = st.selectbox("Sort by", list(SORT_LABELS), format_func=SORT_LABELS.get, key="dashboard_sort")
    with col3:
        st.write("")
        if st.button("Clear", key="dashboard_clear"):
            st.session_state.pop("dashboard_search", None)
            st.session_state.pop("dashboard_sort", None)
            st.rerun()

    dashboards = panel.view(term, sort_key)
    st.caption(f"Showing {len(dashboards)} of {len(panel.items)} dashboards")
    if not dashboards:
        st.info("No dashboards match the current filters.")
        return

    candidates = _load_candidates(panel)
    for dashboard in dashboards:
        _render_row(panel, dashboard, candidates)

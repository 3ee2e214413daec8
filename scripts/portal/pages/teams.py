"""Teams - Admin only."""
import pandas as pd
import streamlit as st

from dashportal.auth.session import Session
from dashportal.services.panels import ERROR, SUCCESS, TeamPanel
from scripts.portal.utils.client import get_client
from scripts.portal.utils.errors import flash, render_flash


def render_teams_page(session: Session):
    st.title("👥 Teams")
    render_flash()

    panel = TeamPanel(get_client(), actor=session.email)
    loaded = panel.list()
    if loaded.level == ERROR:
        st.error(loaded.message)
        return

    with st.expander("➕ New team"):
        with st.form("create_team", clear_on_submit=True):
            name = st.text_input("Name *")
            description = st.text_area("Description")
            if st.form_submit_button("Create", type="primary"):
                outcome = panel.create({"name": name, "description": description})
                if outcome.level == SUCCESS:
                    flash(outcome)
                    st.rerun()
                st.error(outcome.message)

    col1, col2 = st.columns([3, 2])
    with col1:
        term = st.text_input("🔍 Search", key="team_search")
    with col2:
        sort_key = st.selectbox(
            "Sort by",
            ["name", "active_first"],
            format_func=lambda k: {"name": "Name", "active_first": "Active first"}[k],
            key="team_sort",
        )

    teams = panel.view(term, sort_key)
    if not teams:
        st.info("No teams found.")
        return

    df = pd.DataFrame(
        [{"Name": t.name, "Description": t.description or "-", "Active": "✅" if t.is_active else "❌"} for t in teams]
    )
    st.dataframe(df, use_container_width=True, hide_index=True)

    st.subheader("Edit team")
    team = st.selectbox("Team", teams, format_func=lambda t: t.name, key="team_edit_select")
    with st.form(f"edit_team_{team.id}"):
        name = st.text_input("Name *", value=team.name)
        description = st.text_area("Description", value=team.description or "")
        if st.form_submit_button("Save"):
            outcome = panel.update(team.id, {"name": name, "description": description})
            if outcome.level == SUCCESS:
                flash(outcome)
                st.rerun()
            st.error(outcome.message)

    if team.is_active and st.button("Deactivate team", key=f"deactivate_{team.id}"):
        flash(panel.delete(team.id))
        st.rerun()

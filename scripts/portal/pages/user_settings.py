"""User Settings - Admin only."""
import pandas as pd
import streamlit as st

from dashportal.auth.session import Session
from dashportal.models.domain import AccessLevel, User
from dashportal.services.panels import ERROR, SUCCESS, TeamPanel, UserPanel
from scripts.portal.utils.client import get_client
from scripts.portal.utils.errors import flash, render_flash

LEVELS = [level.value for level in AccessLevel]
SORT_LABELS = {
    "name": "Name",
    "email": "Email",
    "access_level": "Access level",
    "newest": "Newest first",
    "oldest": "Oldest first",
}


def _user_form(key: str, teams: list, user: User = None):
    name = st.text_input("Name *", value=user.name if user else "", key=f"{key}_name")
    email = st.text_input("Email *", value=user.email if user else "", key=f"{key}_email")
    level_index = LEVELS.index(user.access_level.value) if user else LEVELS.index(AccessLevel.USER.value)
    access_level = st.selectbox("Access level *", LEVELS, index=level_index, key=f"{key}_level")
    team_options = list(teams)
    if user and user.team and user.team not in team_options:
        team_options.append(user.team)
    team_index = team_options.index(user.team) if user and user.team in team_options else None
    team = st.selectbox("Team *", team_options, index=team_index, key=f"{key}_team")
    return {"name": name, "email": email, "access_level": access_level, "team": team or ""}


def render_user_settings_page(session: Session):
    st.title("⚙️ Users")
    render_flash()

    client = get_client()
    panel = UserPanel(client, actor=session.email)
    loaded = panel.list()
    if loaded.level == ERROR:
        st.error(loaded.message)
        return
    team_panel = TeamPanel(client, actor=session.email)
    team_panel.list()
    teams = team_panel.active_names()

    with st.expander("➕ New user"):
        with st.form("create_user", clear_on_submit=True):
            fields = _user_form("new_user", teams)
            if st.form_submit_button("Create", type="primary"):
                outcome = panel.create(fields)
                if outcome.level == SUCCESS:
                    flash(outcome)
                    st.rerun()
                st.error(outcome.message)

    col1, col2, col3 = st.columns([3, 1, 2])
    with col1:
        term = st.text_input("🔍 Search", key="user_search", placeholder="Name or email")
    with col2:
        level_filter = st.selectbox("Access", ["All"] + LEVELS, key="user_level_filter")
    with col3:
        sort_key = st.selectbox("Sort by", list(SORT_LABELS), format_func=SORT_LABELS.get, key="user_sort")

    users = panel.view(term, sort_key, access_level=None if level_filter == "All" else level_filter)
    if not users:
        st.info("No users match the current filters.")
        return

    df = pd.DataFrame(
        [
            {
                "Name": u.name,
                "Email": u.email,
                "Access": u.access_level.value,
                "Team": u.team or "-",
                "Last login": u.last_login.strftime("%Y-%m-%d %H:%M") if u.last_login else "-",
            }
            for u in users
        ]
    )
    st.dataframe(df, use_container_width=True, hide_index=True)

    st.subheader("Edit user")
    user = st.selectbox("User", users, format_func=lambda u: f"{u.name} <{u.email}>", key="user_edit_select")
    with st.form(f"edit_user_{user.id}"):
        fields = _user_form(f"edit_{user.id}", teams, user)
        if st.form_submit_button("Save"):
            outcome = panel.update(user.id, fields)
            if outcome.level == SUCCESS:
                flash(outcome)
                st.rerun()
            st.error(outcome.message)

    confirm = st.checkbox("I understand this cannot be undone", key=f"confirm_delete_user_{user.id}")
    if st.button("🗑️ Delete user", key=f"delete_user_{user.id}", disabled=not confirm):
        flash(panel.delete(user.id, confirm=confirm))
        st.rerun()

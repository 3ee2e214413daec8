"""Dashboard Analytics - Admin only."""
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from dashportal.analysis.clicks import (
    DEFAULT_TIME_RANGE,
    TimeRange,
    chart_series,
    daily_counts,
    dashboards_last_months,
    distinct_dashboards_per_month,
    monthly_counts,
    monthly_dashboard_matrix,
    portal_timezone,
    summary_stats,
    top_dashboards,
)
from dashportal.auth.session import Session
from dashportal.config import get_config
from dashportal.services.clicks import load_clicks
from dashportal.services.inactive_users import InactiveUserCleanup
from scripts.portal.utils.client import get_client

_PENDING_DELETE_KEY = "pending_inactive_delete"

RANGE_LABELS = {
    TimeRange.LAST_7_DAYS: "Last 7 days",
    TimeRange.LAST_30_DAYS: "Last 30 days",
    TimeRange.LAST_90_DAYS: "Last 90 days",
}


def _bar(rows, title: str, color: str = "#1f77b4") -> go.Figure:
    series = chart_series(rows)
    fig = go.Figure(go.Bar(x=series["bucket"], y=series["clicks"], marker_color=color))
    fig.update_layout(title=title, height=320, margin=dict(l=10, r=10, t=40, b=10))
    return fig


def _render_clicks(session: Session) -> None:
    analytics = get_config().analytics
    tz = portal_timezone(analytics.timezone)

    time_range = st.radio(
        "Time range",
        list(RANGE_LABELS),
        format_func=RANGE_LABELS.get,
        horizontal=True,
        index=list(RANGE_LABELS).index(DEFAULT_TIME_RANGE),
        key="analytics_range",
    )
    loaded = load_clicks(get_client(), time_range)
    if loaded.error:
        st.error(loaded.error)
    events = loaded.events

    stats = summary_stats(events, tz=tz)
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total clicks", stats.total_clicks)
    col2.metric("Unique users", stats.unique_users)
    col3.metric("Top dashboard", stats.top_dashboard)
    col4.metric("Clicks today", stats.clicks_today)

    if not events:
        st.info("No clicks recorded in this period.")
        return

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(
            _bar(daily_counts(events, limit=analytics.daily_bucket_limit, tz=tz), "Clicks per day"),
            use_container_width=True,
        )
    with col2:
        top = top_dashboards(events, limit=analytics.top_dashboard_limit)
        fig = px.pie(names=[label for label, _ in top], values=[n for _, n in top], title="Top dashboards", hole=0.4)
        st.plotly_chart(fig, use_container_width=True)

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(_bar(monthly_counts(events, tz=tz), "Clicks per month", "#2ca02c"), use_container_width=True)
    with col2:
        st.plotly_chart(
            _bar(distinct_dashboards_per_month(events, tz=tz), "Dashboards used per month", "#ff7f0e"),
            use_container_width=True,
        )

    matrix = monthly_dashboard_matrix(events, tz=tz)
    if not matrix.empty:
        long_df = matrix.rename(index=str).reset_index().melt(id_vars="month", var_name="Dashboard", value_name="Clicks")
        fig = px.bar(long_df, x="month", y="Clicks", color="Dashboard", barmode="group", title="Clicks per dashboard per month")
        st.plotly_chart(fig, use_container_width=True)

    st.markdown("**Dashboards viewed (last 2 months)**")
    cols = st.columns(2)
    for col, (month, labels) in zip(cols, dashboards_last_months(events, months=2, tz=tz)):
        with col:
            st.markdown(f"*{month.strftime('%b %Y')}*")
            for label in labels:
                st.markdown(f"- {label}")


def _render_inactive_users(session: Session) -> None:
    days = get_config().analytics.inactive_threshold_days
    st.subheader("🕰️ Inactive users")
    st.caption(f"Users with no login in the last {days} days.")

    cleanup = InactiveUserCleanup(get_client(), actor=session.email)
    cleanup.list_inactive_users()
    if cleanup.error:
        st.error(cleanup.error)
        return
    if not cleanup.users:
        st.success("No inactive users.")
        return

    for user in cleanup.users:
        col1, col2, col3 = st.columns([3, 2, 1])
        with col1:
            st.markdown(f"**{user.name}** · {user.email}")
        with col2:
            st.caption(f"Last login: {user.last_login.strftime('%Y-%m-%d') if user.last_login else 'never'}")
        with col3:
            if st.session_state.get(_PENDING_DELETE_KEY) == user.id:
                if st.button("Confirm", key=f"confirm_inactive_{user.id}", type="primary"):
                    st.session_state.pop(_PENDING_DELETE_KEY, None)
                    if cleanup.delete_user(user.id, confirm=True):
                        st.rerun()
                    st.error(cleanup.error)
                if st.button("Cancel", key=f"cancel_inactive_{user.id}"):
                    st.session_state.pop(_PENDING_DELETE_KEY, None)
                    st.rerun()
            elif st.button("🗑️", key=f"delete_inactive_{user.id}", help="Delete user"):
                st.session_state[_PENDING_DELETE_KEY] = user.id
                st.rerun()

    confirm = st.checkbox(f"Delete all {len(cleanup.users)} inactive users", key="confirm_delete_inactive")
    if st.button("Delete all", disabled=not confirm, type="primary", key="delete_all_inactive"):
        with st.spinner("Deleting inactive users..."):
            report = cleanup.delete_all_inactive(confirm=confirm)
        if report.ok:
            st.success(f"Deleted {len(report.deleted)} users")
        else:
            st.error(f"Deleted {len(report.deleted)} users; {len(report.failed)} could not be deleted")
        df = pd.DataFrame({"Deleted": pd.Series(report.deleted, dtype=str), "Failed": pd.Series(report.failed, dtype=str)})
        st.dataframe(df, use_container_width=True, hide_index=True)


def render_dashboard_analytics_page(session: Session):
    if not session.is_admin:
        st.error("Access denied. Only administrators can view analytics.")
        return

    st.title("📈 Dashboard Analytics")
    _render_clicks(session)
    st.divider()
    _render_inactive_users(session)

"""
Streamlit portal entrypoint.

Run with `streamlit run scripts/portal/app.py`.
"""

from __future__ import annotations

import streamlit as st

import scripts.portal.core as core
from dashportal.config import get_config
from dashportal.logging_utils import get_logger
from scripts.portal.components.google_sign_in import GoogleIdentityWidget

get_logger("dashportal")
get_logger("scripts.portal")


def main() -> None:
    """Render the portal with guarded routing and sidebar navigation."""
    st.set_page_config(page_title="Dashboard Portal", layout="wide")

    session = core.check_authentication(core.AUTH_DISABLED)
    identity_widget = GoogleIdentityWidget(get_config().auth.google_client_id)

    requested = core.current_route()
    route = core.resolve_route(requested, session)
    if route != requested:
        st.query_params["page"] = route

    if session.is_authenticated:
        clicked = core.render_sidebar(session, route, identity_widget)
        if clicked and clicked != route:
            core.navigate(clicked)

    core.route_to_page(route, session)


if __name__ == "__main__":
    main()

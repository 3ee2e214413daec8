"""Login page: Google sign-in exchanged for a portal session."""
import streamlit as st

from dashportal.auth.guard import USER_LANDING_ROUTE
from dashportal.auth.session import Session
from dashportal.auth.sso import complete_sign_in
from dashportal.client import APIError
from dashportal.config import get_config
from scripts.portal.components.google_sign_in import GoogleIdentityWidget
from scripts.portal.utils.client import get_client
from scripts.portal.utils.errors import render_api_error


def render_login_page(session: Session):
    st.title("🔐 Sign in")
    st.markdown("Sign in with your Google account to see the dashboards shared with you.")

    widget = GoogleIdentityWidget(get_config().auth.google_client_id)
    credential = widget.pop_credential()
    if credential:
        try:
            with st.spinner("Signing in..."):
                complete_sign_in(credential, get_client())
        except APIError as e:
            render_api_error(e, service="Sign-in service")
        except ValueError as e:
            st.error(f"❌ {e}")
        else:
            st.query_params["page"] = USER_LANDING_ROUTE
            st.rerun()

    if not widget.client_id:
        st.warning("GOOGLE_CLIENT_ID is not configured; set DISABLE_AUTH=1 for local development.")
        return
    widget.render()


if __name__ == "__main__":
    render_login_page(Session())

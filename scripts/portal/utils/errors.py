import logging
from typing import Optional

import streamlit as st

from dashportal.client import APIError, ResponseShapeError
from dashportal.services.panels import ERROR, SUCCESS, PanelOutcome

logger = logging.getLogger(__name__)

_FLASH_KEY = "_portal_flash"


def render_api_error(exc: APIError, service: str = "Portal API"):
    if exc.status_code == 0:
        st.error(f"❌ {service} unreachable.")
        st.info("Check PORTAL_API_URL, network connectivity, and that the backend is running.")
    elif isinstance(exc, ResponseShapeError):
        st.error(f"❌ {service} returned an unexpected response: {exc.message}")
        st.info("The backend and portal versions may be out of sync.")
    elif exc.status_code in (401, 403):
        st.error(f"❌ {service} refused the request: {exc.message}")
        st.info("Sign out and sign in again, or ask an administrator for access.")
    else:
        st.error(f"❌ {service} returned HTTP {exc.status_code}: {exc.message}")
        st.info("Retry the request or contact support if the issue persists.")
    logger.warning(f"{service} error shown to user: {exc}")


def render_outcome(outcome: PanelOutcome) -> None:
    """Show a panel outcome; silent outcomes render nothing."""
    if outcome.level == SUCCESS:
        st.success(outcome.message)
    elif outcome.level == ERROR:
        st.error(outcome.message)


def flash(outcome: PanelOutcome) -> None:
    """Keep an outcome across st.rerun() so it shows on the next render."""
    st.session_state[_FLASH_KEY] = outcome


def render_flash() -> Optional[PanelOutcome]:
    outcome = st.session_state.pop(_FLASH_KEY, None)
    if outcome is not None:
        render_outcome(outcome)
    return outcome

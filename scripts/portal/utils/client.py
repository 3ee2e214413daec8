"""Shared API client for the portal process."""

import streamlit as st

from dashportal.client import PortalClient


@st.cache_resource
def get_client() -> PortalClient:
    """One pooled httpx client per Streamlit server process."""
    return PortalClient.from_config()

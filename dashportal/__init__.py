# dashportal/__init__.py

"""
Role-gated portal for embedded BI dashboards.

This package centralizes:
- config (backend URL, sign-in settings, analytics tuning)
- the backend API client
- session, route guard and entitlement logic
- CRUD panels and click analytics used by the Streamlit pages.
"""

__version__ = "0.1.0"

__all__ = ["config"]

# dashportal/config.py

"""
Central configuration for the dashboard portal.
Values are loaded from environment variables or a .env file.

This module automatically loads .env file if python-dotenv is installed.
Otherwise, it falls back to environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

# Load .env file if python-dotenv is installed (optional dependency)
try:
    from dotenv import load_dotenv

    load_dotenv()
except ImportError:
    # If dotenv is not installed, silently ignore; env vars still work.
    pass


# ---------------------------------------------------------
#  🌐 Backend API
# ---------------------------------------------------------

PORTAL_API_URL = os.getenv("PORTAL_API_URL", "http://localhost:8080")
PORTAL_API_TIMEOUT = float(os.getenv("PORTAL_API_TIMEOUT", "30"))
# Optional; the backend may ignore it
PORTAL_API_KEY = os.getenv("PORTAL_API_KEY", "")

# ---------------------------------------------------------
#  🔐 Sign-in
# ---------------------------------------------------------

GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID", "")
AUTH_DISABLED = os.getenv("DISABLE_AUTH", "").lower() in ("1", "true", "yes")

# ---------------------------------------------------------
#  📊 Analytics
# ---------------------------------------------------------

# Empty means the server's local timezone
PORTAL_TIMEZONE = os.getenv("PORTAL_TIMEZONE", "")
INACTIVE_THRESHOLD_DAYS = int(os.getenv("INACTIVE_THRESHOLD_DAYS", "60"))
DAILY_BUCKET_LIMIT = 10
TOP_DASHBOARD_LIMIT = 5


# ---------------------------------------------------------
#  📦 CONFIG STRUCTURES
# ---------------------------------------------------------


@dataclass(frozen=True)
class ApiConfig:
    base_url: str = PORTAL_API_URL
    timeout: float = PORTAL_API_TIMEOUT
    api_key: str = PORTAL_API_KEY


@dataclass(frozen=True)
class AuthConfig:
    google_client_id: str = GOOGLE_CLIENT_ID
    disabled: bool = AUTH_DISABLED


@dataclass(frozen=True)
class AnalyticsConfig:
    timezone: str = PORTAL_TIMEZONE
    inactive_threshold_days: int = INACTIVE_THRESHOLD_DAYS
    daily_bucket_limit: int = DAILY_BUCKET_LIMIT
    top_dashboard_limit: int = TOP_DASHBOARD_LIMIT


@dataclass(frozen=True)
class PortalConfig:
    api: ApiConfig
    auth: AuthConfig
    analytics: AnalyticsConfig


# ---------------------------------------------------------
#  🔧 SINGLETON ACCESSOR
# ---------------------------------------------------------

_config_singleton: PortalConfig | None = None


def get_config() -> PortalConfig:
    global _config_singleton
    if _config_singleton is None:
        _config_singleton = PortalConfig(
            api=ApiConfig(),
            auth=AuthConfig(),
            analytics=AnalyticsConfig(),
        )
    return _config_singleton

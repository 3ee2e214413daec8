"""Portal configuration and route registry."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from dashportal.auth.guard import LOGIN_ROUTE, USER_LANDING_ROUTE
from dashportal.config import get_config
from dashportal.models.domain import AccessLevel

AUTH_DISABLED = get_config().auth.disabled

# Mapping route -> (module_path, function_name, required_role)
# required_role None means the route is public (login only)
PAGE_REGISTRY: Dict[str, Tuple[str, str, Optional[AccessLevel]]] = {
    LOGIN_ROUTE: ("scripts.portal.pages.login", "render_login_page", None),
    USER_LANDING_ROUTE: ("scripts.portal.pages.user_dashboard", "render_user_dashboard_page", AccessLevel.USER),
    "/dashboard-admin": ("scripts.portal.pages.dashboard_admin", "render_dashboard_admin_page", AccessLevel.ADMIN),
    "/teams": ("scripts.portal.pages.teams", "render_teams_page", AccessLevel.ADMIN),
    "/user-settings": ("scripts.portal.pages.user_settings", "render_user_settings_page", AccessLevel.ADMIN),
    "/dashboard-analytics": ("scripts.portal.pages.dashboard_analytics", "render_dashboard_analytics_page", AccessLevel.ADMIN),
}

PAGE_LABELS = {
    USER_LANDING_ROUTE: "📊 My Dashboards",
    "/dashboard-admin": "🛠️ Manage Dashboards",
    "/teams": "👥 Teams",
    "/user-settings": "⚙️ Users",
    "/dashboard-analytics": "📈 Analytics",
}

NAV_ORDER = [USER_LANDING_ROUTE, "/dashboard-admin", "/teams", "/user-settings", "/dashboard-analytics"]
ADMIN_PAGES = [route for route, entry in PAGE_REGISTRY.items() if entry[2] == AccessLevel.ADMIN]

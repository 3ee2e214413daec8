"""Portal core package."""

from .config import AUTH_DISABLED, ADMIN_PAGES, NAV_ORDER, PAGE_LABELS, PAGE_REGISTRY
from .auth import check_authentication, get_mock_user
from .routing import current_route, navigate, resolve_route, route_to_page
from .sidebar import render_sidebar

__all__ = [
    "AUTH_DISABLED",
    "ADMIN_PAGES",
    "NAV_ORDER",
    "PAGE_LABELS",
    "PAGE_REGISTRY",
    "check_authentication",
    "get_mock_user",
    "current_route",
    "navigate",
    "resolve_route",
    "route_to_page",
    "render_sidebar",
]

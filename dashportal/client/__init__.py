"""
dashportal.client

Python client for the dashboard portal backend API.
"""

from __future__ import annotations

from typing import Optional

import httpx

from dashportal.client.auth import AuthClient
from dashportal.client.base import APIError, BaseHTTPClient, ResponseShapeError
from dashportal.client.clicks import ClicksClient
from dashportal.client.dashboards import DashboardAccessClient, DashboardsClient
from dashportal.client.teams import TeamsClient
from dashportal.client.users import UsersClient


class PortalClient:
    """
    Top-level API client.

    Example:
        client = PortalClient(api_url="https://api.example.com")
        dashboards = client.dashboards.list()
    """

    def __init__(
        self,
        api_url: str,
        api_key: Optional[str] = None,
        *,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.http = BaseHTTPClient(api_url=api_url, api_key=api_key, timeout=timeout, transport=transport)
        self.auth = AuthClient(self.http)
        self.dashboards = DashboardsClient(self.http)
        self.access = DashboardAccessClient(self.http)
        self.teams = TeamsClient(self.http)
        self.users = UsersClient(self.http)
        self.clicks = ClicksClient(self.http)

    @classmethod
    def from_config(cls) -> "PortalClient":
        from dashportal.config import get_config

        api = get_config().api
        return cls(api_url=api.base_url, api_key=api.api_key or None, timeout=api.timeout)

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "PortalClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = [
    "APIError",
    "ResponseShapeError",
    "PortalClient",
    "AuthClient",
    "ClicksClient",
    "DashboardsClient",
    "DashboardAccessClient",
    "TeamsClient",
    "UsersClient",
]

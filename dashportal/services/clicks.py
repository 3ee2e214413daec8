"""Click tracking and loading for the analytics screen."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from dashportal.analysis.clicks import TimeRange
from dashportal.client import APIError, PortalClient
from dashportal.models.domain import ClickEvent, Dashboard

logger = logging.getLogger(__name__)


@dataclass
class ClickLoad:
    events: List[ClickEvent] = field(default_factory=list)
    error: Optional[str] = None


def track_click(client: PortalClient, dashboard: Dashboard, user_email: str) -> bool:
    """Record that a user opened a dashboard. Failures never block opening it."""
    try:
        client.clicks.track(dashboard.id, user_email, dashboard.title)
    except APIError as e:
        logger.warning(f"Click not recorded for dashboard {dashboard.id}: {e.message}")
        return False
    return True


def load_clicks(client: PortalClient, time_range: TimeRange, today: Optional[date] = None) -> ClickLoad:
    start, end = time_range.window(today)
    try:
        return ClickLoad(events=client.clicks.list(start, end))
    except APIError as e:
        logger.error(f"Failed to load clicks {start}..{end}: {e.message}")
        return ClickLoad(events=[], error=f"Could not load click data: {e.message}")

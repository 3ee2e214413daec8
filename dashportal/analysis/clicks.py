"""
Click analytics.

Every view is recomputed from the full event list on each call; nothing is
updated incrementally. Calendar bucketing happens in the portal timezone.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple
from zoneinfo import ZoneInfo

import pandas as pd

from dashportal.models.domain import ClickEvent

NO_DASHBOARD = "N/A"


class TimeRange(str, Enum):
    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"
    LAST_90_DAYS = "90d"

    @property
    def days(self) -> int:
        return int(self.value[:-1])

    def window(self, today: Optional[date] = None) -> Tuple[date, date]:
        """(start, end) dates for the clicks query."""
        end = today or date.today()
        return end - timedelta(days=self.days), end


DEFAULT_TIME_RANGE = TimeRange.LAST_7_DAYS


@dataclass(frozen=True)
class SummaryStats:
    total_clicks: int = 0
    unique_users: int = 0
    top_dashboard: str = NO_DASHBOARD
    clicks_today: int = 0


def portal_timezone(name: str = "") -> Optional[tzinfo]:
    """ZoneInfo for a configured name; None means the server's local time."""
    return ZoneInfo(name) if name else None


def to_frame(events: Iterable[ClickEvent], tz: Optional[tzinfo] = None) -> pd.DataFrame:
    """
    Flatten events into a DataFrame with local calendar columns.

    Columns: label, user_email, local (datetime), day (date), month (Period[M]).
    """
    rows = []
    for event in events:
        local = event.timestamp.astimezone(tz)
        rows.append(
            {
                "label": event.label,
                "user_email": event.user_email,
                "local": local,
                "day": local.date(),
                "month": pd.Period(year=local.year, month=local.month, freq="M"),
            }
        )
    return pd.DataFrame(rows, columns=["label", "user_email", "local", "day", "month"])


def daily_counts(events: Iterable[ClickEvent], limit: int = 10, tz: Optional[tzinfo] = None) -> List[Tuple[date, int]]:
    """Clicks per local day: the latest `limit` days, ascending by date."""
    df = to_frame(events, tz)
    if df.empty:
        return []
    counts = df.groupby("day").size().sort_index()
    return [(day, int(n)) for day, n in counts.tail(limit).items()]


def _label_counts(df: pd.DataFrame) -> pd.Series:
    # First-seen order, then a stable descending sort keeps ties in that order
    counts = df.groupby("label", sort=False).size()
    return counts.sort_values(ascending=False, kind="stable")


def top_dashboards(events: Iterable[ClickEvent], limit: int = 5) -> List[Tuple[str, int]]:
    """Most clicked dashboard labels, count descending, ties in first-seen order."""
    df = to_frame(events)
    if df.empty:
        return []
    return [(label, int(n)) for label, n in _label_counts(df).head(limit).items()]


def monthly_counts(events: Iterable[ClickEvent], tz: Optional[tzinfo] = None) -> List[Tuple[pd.Period, int]]:
    """Clicks per calendar month, chronological."""
    df = to_frame(events, tz)
    if df.empty:
        return []
    counts = df.groupby("month").size().sort_index()
    return [(month, int(n)) for month, n in counts.items()]


def monthly_dashboard_matrix(events: Iterable[ClickEvent], tz: Optional[tzinfo] = None) -> pd.DataFrame:
    """
    Clicks per (month, dashboard label) for the grouped bar chart.

    Returns:
        DataFrame indexed by month (ascending) with one column per label
        (sorted by name); missing combinations are 0.
    """
    df = to_frame(events, tz)
    if df.empty:
        return pd.DataFrame()
    matrix = df.pivot_table(index="month", columns="label", values="day", aggfunc="count", fill_value=0)
    matrix = matrix.sort_index().reindex(sorted(matrix.columns), axis=1)
    return matrix.astype(int)


def distinct_dashboards_per_month(events: Iterable[ClickEvent], tz: Optional[tzinfo] = None) -> List[Tuple[pd.Period, int]]:
    """Number of distinct dashboard labels clicked in each month."""
    df = to_frame(events, tz)
    if df.empty:
        return []
    counts = df.groupby("month")["label"].nunique().sort_index()
    return [(month, int(n)) for month, n in counts.items()]


def dashboards_last_months(events: Iterable[ClickEvent], months: int = 2, tz: Optional[tzinfo] = None) -> List[Tuple[pd.Period, List[str]]]:
    """Distinct labels seen in each of the latest `months` buckets, labels in first-seen order."""
    df = to_frame(events, tz)
    if df.empty or months <= 0:
        return []
    labels = df.groupby("month")["label"].unique().sort_index().tail(months)
    return [(month, [str(label) for label in names]) for month, names in labels.items()]


def summary_stats(events: Iterable[ClickEvent], today: Optional[date] = None, tz: Optional[tzinfo] = None) -> SummaryStats:
    """Headline numbers; empty input gives zeros and N/A."""
    df = to_frame(events, tz)
    if df.empty:
        return SummaryStats()
    today = today or datetime.now(tz).date()
    return SummaryStats(
        total_clicks=int(len(df)),
        unique_users=int(df["user_email"].nunique(dropna=False)),
        top_dashboard=str(_label_counts(df).index[0]),
        clicks_today=int((df["day"] == today).sum()),
    )


def chart_series(rows: List[Tuple[object, int]], label: str = "clicks") -> Dict[str, list]:
    """Split (bucket, count) pairs into plotting columns."""
    return {"bucket": [str(b) for b, _ in rows], label: [n for _, n in rows]}


__all__ = [
    "DEFAULT_TIME_RANGE",
    "NO_DASHBOARD",
    "SummaryStats",
    "TimeRange",
    "chart_series",
    "daily_counts",
    "dashboards_last_months",
    "distinct_dashboards_per_month",
    "monthly_counts",
    "monthly_dashboard_matrix",
    "portal_timezone",
    "summary_stats",
    "to_frame",
    "top_dashboards",
]

"""
Domain models for the dashboard portal.

Every entity the backend returns is validated into one of these models.
The backend speaks camelCase JSON; models accept both the camelCase alias
and the snake_case field name, and dump back to camelCase for requests.

Access grants are expressed with a single typed target (team or email) so
that team-scoped and individually-scoped entitlements share one model.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, FrozenSet, List, Literal, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel


# ============================================================================
# Enums
# ============================================================================


class AccessLevel(str, Enum):
    """Portal roles."""
    ADMIN = "Admin"
    USER = "User"


# ============================================================================
# Helpers
# ============================================================================


def coerce_timestamp(value: Any) -> Optional[datetime]:
    """
    Normalize the timestamp shapes the backend emits into an aware datetime.

    Accepts ISO-8601 strings, epoch seconds, datetimes, and Firestore-style
    objects ({"_seconds": ..., "_nanoseconds": ...} or without underscores).
    Naive values are treated as UTC.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(float(value), tz=timezone.utc)
    if isinstance(value, dict):
        seconds = value.get("_seconds", value.get("seconds"))
        if seconds is None:
            raise ValueError(f"Unrecognized timestamp object: {value!r}")
        nanos = value.get("_nanoseconds", value.get("nanoseconds", 0)) or 0
        return datetime.fromtimestamp(float(seconds) + float(nanos) / 1e9, tz=timezone.utc)
    if isinstance(value, str):
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    raise ValueError(f"Unrecognized timestamp: {value!r}")


class PortalModel(BaseModel):
    """Base model with camelCase aliases and lenient extra handling."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("id", mode="before", check_fields=False)
    @classmethod
    def _id_as_str(cls, value: Any) -> Any:
        return str(value) if value is not None else value

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ============================================================================
# Access targets and principals
# ============================================================================


class AccessTarget(BaseModel):
    """One grantee of a dashboard: a team name or an email address."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["team", "email"]
    value: str

    @classmethod
    def team(cls, name: str) -> "AccessTarget":
        return cls(kind="team", value=name)

    @classmethod
    def email(cls, address: str) -> "AccessTarget":
        return cls(kind="email", value=address)

    @classmethod
    def parse(cls, raw: str) -> "AccessTarget":
        """Strings containing '@' are emails, anything else a team name."""
        raw = raw.strip()
        return cls.email(raw) if "@" in raw else cls.team(raw)

    @property
    def label(self) -> str:
        return self.value

    def to_payload(self) -> dict:
        return {self.kind: self.value}


class Principal(BaseModel):
    """The authenticated identity making requests."""

    model_config = ConfigDict(frozen=True)

    email: str
    role: AccessLevel = AccessLevel.USER
    team: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == AccessLevel.ADMIN

    def targets(self) -> FrozenSet[AccessTarget]:
        """All grant targets this principal matches."""
        found = {AccessTarget.email(self.email)}
        if self.team:
            found.add(AccessTarget.team(self.team))
        return frozenset(found)

    def can_open(self, dashboard: "Dashboard") -> bool:
        return bool(self.targets() & set(dashboard.access))


# ============================================================================
# Entities
# ============================================================================


def _dedupe(targets: List[AccessTarget]) -> List[AccessTarget]:
    seen = set()
    out = []
    for target in targets:
        if target not in seen:
            seen.add(target)
            out.append(target)
    return out


class Dashboard(PortalModel):
    id: str
    title: str = ""
    description: Optional[str] = None
    url: str = ""
    thumbnail: Optional[str] = None
    created_at: Optional[datetime] = None
    access: List[AccessTarget] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _collect_access(cls, data: Any) -> Any:
        # Team-keyed rows carry "access", email-keyed rows "emailsWithAccess"
        if not isinstance(data, dict):
            return data
        data = dict(data)
        targets: List[Any] = []
        for item in data.pop("access", None) or []:
            if isinstance(item, str):
                targets.append(AccessTarget.parse(item))
            elif isinstance(item, dict) and "kind" not in item:
                if item.get("email"):
                    targets.append(AccessTarget.email(item["email"]))
                elif item.get("team"):
                    targets.append(AccessTarget.team(item["team"]))
            else:
                targets.append(item)
        for item in data.pop("emailsWithAccess", None) or []:
            targets.append(AccessTarget.email(item))
        data["access"] = targets
        return data

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_created(cls, value: Any) -> Optional[datetime]:
        return coerce_timestamp(value)

    @field_validator("access")
    @classmethod
    def _unique_access(cls, value: List[AccessTarget]) -> List[AccessTarget]:
        return _dedupe(value)

    def with_access(self, targets: List[AccessTarget]) -> "Dashboard":
        return self.model_copy(update={"access": _dedupe(list(targets))})


class DashboardCreate(PortalModel):
    title: str
    url: str
    description: Optional[str] = None
    thumbnail: Optional[str] = None


class DashboardUpdate(PortalModel):
    title: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    thumbnail: Optional[str] = None


class Team(PortalModel):
    id: str
    name: str
    description: Optional[str] = None
    is_active: bool = True


class TeamCreate(PortalModel):
    name: str
    description: Optional[str] = None


class User(PortalModel):
    id: str
    name: str = ""
    email: str = ""
    access_level: AccessLevel = AccessLevel.USER
    team: Optional[str] = None
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None

    @field_validator("created_at", "last_login", mode="before")
    @classmethod
    def _parse_times(cls, value: Any) -> Optional[datetime]:
        return coerce_timestamp(value)


class UserCreate(PortalModel):
    name: str
    email: str
    access_level: AccessLevel
    team: str


class AccessGrant(PortalModel):
    """Relationship record linking one dashboard to one grantee."""

    dashboard_id: str = Field(
        validation_alias=AliasChoices("dashboardId", "dashboardID", "dashboard_id"),
    )
    target: AccessTarget

    @model_validator(mode="before")
    @classmethod
    def _target_from_row(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "target" in data:
            return data
        data = dict(data)
        if data.get("email"):
            data["target"] = AccessTarget.email(data["email"])
        elif data.get("team"):
            data["target"] = AccessTarget.team(data["team"])
        return data

    @field_validator("dashboard_id", mode="before")
    @classmethod
    def _dashboard_id_as_str(cls, value: Any) -> Any:
        return str(value) if value is not None else value


class ClickEvent(PortalModel):
    """Append-only record of a user opening a dashboard."""

    dashboard_id: str = Field(
        validation_alias=AliasChoices("dashboardId", "dashboardID", "dashboard_id"),
    )
    dashboard_title: Optional[str] = None
    user_email: Optional[str] = None
    timestamp: datetime

    @field_validator("dashboard_id", mode="before")
    @classmethod
    def _dashboard_id_as_str(cls, value: Any) -> Any:
        return str(value) if value is not None else value

    @field_validator("timestamp", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: Any) -> Optional[datetime]:
        return coerce_timestamp(value)

    @property
    def label(self) -> str:
        return self.dashboard_title or f"Dashboard {self.dashboard_id}"


class IdentityRecord(PortalModel):
    """Identity resolved by the backend from a sign-in credential."""

    email: str
    access_level: AccessLevel = AccessLevel.USER
    team: Optional[str] = None
    name: Optional[str] = None
    photo_url: Optional[str] = None


__all__ = [
    "AccessLevel",
    "AccessTarget",
    "AccessGrant",
    "ClickEvent",
    "Dashboard",
    "DashboardCreate",
    "DashboardUpdate",
    "IdentityRecord",
    "Principal",
    "Team",
    "TeamCreate",
    "User",
    "UserCreate",
    "coerce_timestamp",
]

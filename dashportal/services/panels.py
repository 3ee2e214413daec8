"""
CRUD panels for the admin screens.

Each panel keeps the fetched collection as local state, validates required
fields before any mutating request, re-fetches the full list after every
successful write, and reports every action as a PanelOutcome.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, Sequence, Tuple, TypeVar

from dashportal.client import APIError, PortalClient
from dashportal.logging_utils import log_action
from dashportal.models.domain import (
    AccessLevel,
    AccessTarget,
    Dashboard,
    DashboardCreate,
    DashboardUpdate,
    Team,
    TeamCreate,
    User,
    UserCreate,
)
from dashportal.services.entitlements import EntitlementResolver, GrantOutcome

logger = logging.getLogger(__name__)

T = TypeVar("T")

SILENT = "silent"
SUCCESS = "success"
ERROR = "error"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class PanelOutcome:
    level: str
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.level != ERROR


class ValidationFailure(ValueError):
    """Required fields missing; raised before any request is issued."""

    def __init__(self, missing: Sequence[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required fields: {', '.join(self.missing)}")


def _text(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def _created(item: Any) -> datetime:
    return getattr(item, "created_at", None) or _EPOCH


class CrudPanel(Generic[T]):
    """Shared list/create/update/delete/filter/sort behavior."""

    entity_type: str = ""
    required_fields: Tuple[str, ...] = ()
    search_fields: Tuple[str, ...] = ()
    # sort key -> (key function, descending)
    sort_keys: Dict[str, Tuple[Callable[[Any], Any], bool]] = {}
    default_sort: str = ""
    hard_delete: bool = True

    def __init__(self, client: PortalClient, actor: Optional[str] = None):
        self._client = client
        self.actor = actor
        self.items: List[T] = []
        self.error: Optional[str] = None

    # --- hooks -----------------------------------------------------------

    def _fetch(self) -> List[T]:
        raise NotImplementedError

    def _create(self, fields: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def _update(self, item_id: str, fields: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def _delete(self, item_id: str) -> None:
        raise NotImplementedError

    def _search_values(self, item: T) -> List[str]:
        return [_text(getattr(item, name, "")) for name in self.search_fields]

    # --- operations ------------------------------------------------------

    def list(self) -> PanelOutcome:
        """Fetch the whole collection; on failure keep an empty list and an error."""
        try:
            self.items = self._fetch()
            self.error = None
            return PanelOutcome(SILENT)
        except APIError as e:
            logger.error(f"Failed to load {self.entity_type}s: {e.message}")
            self.items = []
            self.error = f"Could not load {self.entity_type}s: {e.message}"
            return PanelOutcome(ERROR, self.error)

    def validate(self, fields: Mapping[str, Any]) -> None:
        missing = [name for name in self.required_fields if not _text(fields.get(name))]
        if missing:
            raise ValidationFailure(missing)

    def _mutate(self, action: str, entity_id: Optional[str], call: Callable[[], None], done: str) -> PanelOutcome:
        try:
            call()
        except APIError as e:
            logger.error(f"Failed to {action} {self.entity_type} {entity_id or ''}: {e.message}")
            return PanelOutcome(ERROR, e.message or f"Failed to {action} {self.entity_type}")
        except ValueError as e:
            return PanelOutcome(ERROR, f"Invalid {self.entity_type}: {e}")
        log_action(logger, action, actor=self.actor, entity_type=self.entity_type, entity_id=entity_id)
        refreshed = self.list()
        if not refreshed.ok:
            return PanelOutcome(ERROR, f"{done}, but the list could not be refreshed: {self.error}")
        return PanelOutcome(SUCCESS, done)

    def create(self, fields: Mapping[str, Any]) -> PanelOutcome:
        try:
            self.validate(fields)
        except ValidationFailure as e:
            return PanelOutcome(ERROR, str(e))
        return self._mutate("create", None, lambda: self._create(fields), f"{self.entity_type.capitalize()} created")

    def update(self, item_id: str, fields: Mapping[str, Any]) -> PanelOutcome:
        try:
            self.validate(fields)
        except ValidationFailure as e:
            return PanelOutcome(ERROR, str(e))
        return self._mutate("update", item_id, lambda: self._update(item_id, fields), f"{self.entity_type.capitalize()} updated")

    def delete(self, item_id: str, confirm: bool = False) -> PanelOutcome:
        """Delete one record. Hard deletes require confirm=True."""
        if self.hard_delete and not confirm:
            return PanelOutcome(ERROR, f"Confirm deletion of this {self.entity_type}; it cannot be undone")
        done = f"{self.entity_type.capitalize()} {'deleted' if self.hard_delete else 'deactivated'}"
        return self._mutate("delete", item_id, lambda: self._delete(item_id), done)

    def filter(self, term: str, items: Optional[List[T]] = None) -> List[T]:
        source = self.items if items is None else items
        needle = (term or "").strip().lower()
        if not needle:
            return list(source)
        return [item for item in source if any(needle in v.lower() for v in self._search_values(item))]

    def sort(self, key: Optional[str] = None, items: Optional[List[T]] = None) -> List[T]:
        """Stable sort; equal keys keep fetch order."""
        source = self.items if items is None else items
        entry = self.sort_keys.get(key or self.default_sort)
        if entry is None:
            return list(source)
        key_func, descending = entry
        return sorted(source, key=key_func, reverse=descending)

    def view(self, term: str = "", key: Optional[str] = None) -> List[T]:
        return self.sort(key, self.filter(term))

    def find(self, item_id: str) -> Optional[T]:
        return next((item for item in self.items if getattr(item, "id", None) == item_id), None)


class DashboardPanel(CrudPanel[Dashboard]):
    entity_type = "dashboard"
    required_fields = ("title", "url")
    search_fields = ("title", "description")
    sort_keys = {
        "title": (lambda d: (d.title or "").casefold(), False),
        "newest": (_created, True),
        "oldest": (_created, False),
        "most_access": (lambda d: len(d.access), True),
        "least_access": (lambda d: len(d.access), False),
    }
    default_sort = "title"

    def __init__(self, client: PortalClient, actor: Optional[str] = None):
        super().__init__(client, actor)
        self.resolver = EntitlementResolver(client, actor=actor)

    def _fetch(self) -> List[Dashboard]:
        return self.resolver.load_annotated()

    def _search_values(self, item: Dashboard) -> List[str]:
        return super()._search_values(item) + [t.value for t in item.access]

    def _create(self, fields: Mapping[str, Any]) -> None:
        self._client.dashboards.create(
            DashboardCreate(
                title=_text(fields.get("title")),
                url=_text(fields.get("url")),
                description=_text(fields.get("description")) or None,
                thumbnail=_text(fields.get("thumbnail")) or None,
            )
        )

    def _update(self, item_id: str, fields: Mapping[str, Any]) -> None:
        self._client.dashboards.update(
            item_id,
            DashboardUpdate(
                title=_text(fields.get("title")),
                url=_text(fields.get("url")),
                description=_text(fields.get("description")),
            ),
        )

    def _delete(self, item_id: str) -> None:
        self._client.dashboards.delete(item_id)

    def _replace(self, updated: Optional[Dashboard]) -> None:
        if updated is None:
            return
        self.items = [updated if d.id == updated.id else d for d in self.items]

    def grant(self, dashboard_id: str, target: AccessTarget) -> GrantOutcome:
        dashboard = self.find(dashboard_id)
        if dashboard is None:
            return GrantOutcome(ok=False, message=f"Unknown dashboard {dashboard_id}")
        outcome = self.resolver.grant_access(dashboard, target)
        self._replace(outcome.dashboard)
        return outcome

    def revoke(self, dashboard_id: str, target: AccessTarget) -> GrantOutcome:
        dashboard = self.find(dashboard_id)
        if dashboard is None:
            return GrantOutcome(ok=False, message=f"Unknown dashboard {dashboard_id}")
        outcome = self.resolver.revoke_access(dashboard, target)
        self._replace(outcome.dashboard)
        return outcome


class TeamPanel(CrudPanel[Team]):
    entity_type = "team"
    required_fields = ("name",)
    search_fields = ("name", "description")
    sort_keys = {
        "name": (lambda t: (t.name or "").casefold(), False),
        "active_first": (lambda t: not t.is_active, False),
    }
    default_sort = "name"
    # Dashboards reference teams by name, so teams are deactivated, not removed
    hard_delete = False

    def _fetch(self) -> List[Team]:
        return self._client.teams.list()

    def _payload(self, fields: Mapping[str, Any]) -> TeamCreate:
        return TeamCreate(name=_text(fields.get("name")), description=_text(fields.get("description")))

    def _create(self, fields: Mapping[str, Any]) -> None:
        self._client.teams.create(self._payload(fields))

    def _update(self, item_id: str, fields: Mapping[str, Any]) -> None:
        self._client.teams.update(item_id, self._payload(fields))

    def _delete(self, item_id: str) -> None:
        self._client.teams.deactivate(item_id)

    def active_names(self) -> List[str]:
        return [t.name for t in self.items if t.is_active]


class UserPanel(CrudPanel[User]):
    entity_type = "user"
    required_fields = ("name", "email", "access_level", "team")
    search_fields = ("name", "email")
    sort_keys = {
        "name": (lambda u: (u.name or "").casefold(), False),
        "email": (lambda u: (u.email or "").casefold(), False),
        "access_level": (lambda u: u.access_level.value, False),
        "newest": (_created, True),
        "oldest": (_created, False),
    }
    default_sort = "name"

    def _fetch(self) -> List[User]:
        return self._client.users.list()

    def _payload(self, fields: Mapping[str, Any]) -> UserCreate:
        return UserCreate(
            name=_text(fields.get("name")),
            email=_text(fields.get("email")),
            access_level=AccessLevel(_text(fields.get("access_level"))),
            team=_text(fields.get("team")),
        )

    def _create(self, fields: Mapping[str, Any]) -> None:
        self._client.users.create(self._payload(fields))

    def _update(self, item_id: str, fields: Mapping[str, Any]) -> None:
        self._client.users.update(item_id, self._payload(fields))

    def _delete(self, item_id: str) -> None:
        self._client.users.delete(item_id)

    def filter(self, term: str, items: Optional[List[User]] = None, access_level: Optional[str] = None) -> List[User]:
        found = super().filter(term, items)
        if access_level:
            found = [u for u in found if u.access_level.value == access_level]
        return found

    def view(self, term: str = "", key: Optional[str] = None, access_level: Optional[str] = None) -> List[User]:
        return self.sort(key, self.filter(term, access_level=access_level))


__all__ = [
    "CrudPanel",
    "DashboardPanel",
    "PanelOutcome",
    "TeamPanel",
    "UserPanel",
    "ValidationFailure",
    "SILENT",
    "SUCCESS",
    "ERROR",
]

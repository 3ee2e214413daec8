"""
Entitlement resolution: which dashboards a principal may open, and which
principals may open a dashboard.

Grants are typed targets (team or email). A principal is entitled to a
dashboard when the dashboard's access list contains any of its targets.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Union

from dashportal.client import APIError, PortalClient
from dashportal.logging_utils import log_action
from dashportal.models.domain import AccessGrant, AccessTarget, Dashboard, Principal, User

logger = logging.getLogger(__name__)

Identity = Union[Principal, str]


@dataclass
class EntitlementResult:
    """Dashboards for a view plus a recoverable error message, if loading failed."""

    dashboards: List[Dashboard] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class GrantOutcome:
    ok: bool
    message: str
    dashboard: Optional[Dashboard] = None


def identity_targets(identity: Identity) -> frozenset:
    """Targets matched by a Principal, an email string, or a team name."""
    if isinstance(identity, Principal):
        return identity.targets()
    return frozenset({AccessTarget.parse(identity)})


def attach_access(dashboards: Iterable[Dashboard], grants: Iterable[AccessGrant]) -> List[Dashboard]:
    """Annotate each dashboard with its grants, keeping input order and existing entries."""
    by_dashboard: Dict[str, List[AccessTarget]] = {}
    for grant in grants:
        by_dashboard.setdefault(grant.dashboard_id, []).append(grant.target)
    return [
        dash.with_access(list(dash.access) + by_dashboard.get(dash.id, []))
        for dash in dashboards
    ]


def available_targets(dashboard: Dashboard, candidates: Iterable[AccessTarget]) -> List[AccessTarget]:
    """Candidates not yet granted on this dashboard, ordered case-insensitively."""
    granted = set(dashboard.access)
    remaining = {c for c in candidates if c not in granted}
    return sorted(remaining, key=lambda t: (t.label.lower(), t.kind))


def candidate_targets(users: Iterable[User], team_names: Iterable[str]) -> List[AccessTarget]:
    """Every grantable target: user emails and team names."""
    targets = [AccessTarget.email(u.email) for u in users if u.email]
    targets.extend(AccessTarget.team(name) for name in team_names if name)
    return targets


class EntitlementResolver:
    def __init__(self, client: PortalClient, actor: Optional[str] = None):
        self._client = client
        self._actor = actor

    def load_annotated(self) -> List[Dashboard]:
        dashboards = self._client.dashboards.list()
        grants = self._client.access.list()
        return attach_access(dashboards, grants)

    def list_dashboards_for(self, identity: Identity) -> EntitlementResult:
        """
        Dashboards the identity may open, in API response order.

        Args:
            identity: A Principal, an email address, or a team name

        Returns:
            EntitlementResult; on any API failure the list is empty and error is set
        """
        targets = identity_targets(identity)
        try:
            dashboards = self.load_annotated()
        except APIError as e:
            logger.error(f"Failed to load dashboards for {sorted(t.value for t in targets)}: {e.message}")
            return EntitlementResult(dashboards=[], error=f"Could not load dashboards: {e.message}")
        visible = [d for d in dashboards if targets & set(d.access)]
        return EntitlementResult(dashboards=visible)

    def list_all_with_access(self) -> EntitlementResult:
        """Every dashboard with its resolved access list (admin view)."""
        try:
            return EntitlementResult(dashboards=self.load_annotated())
        except APIError as e:
            logger.error(f"Failed to load dashboards with access: {e.message}")
            return EntitlementResult(dashboards=[], error=f"Could not load dashboards: {e.message}")

    @staticmethod
    def principals_for(dashboard: Dashboard) -> List[AccessTarget]:
        return list(dashboard.access)

    def _confirmed(self, dashboard: Dashboard, echoed: Optional[List[AccessTarget]]) -> Dashboard:
        if echoed is not None:
            return dashboard.with_access(echoed)
        grants = self._client.access.list(dashboard.id)
        return dashboard.with_access([g.target for g in grants])

    def grant_access(self, dashboard: Dashboard, target: AccessTarget) -> GrantOutcome:
        """Grant a target; the returned dashboard reflects server-confirmed access."""
        if target in dashboard.access:
            return GrantOutcome(ok=False, message=f"{target.label} already has access to {dashboard.title}", dashboard=dashboard)
        try:
            echoed = self._client.access.grant(dashboard.id, target)
            updated = self._confirmed(dashboard, echoed)
        except APIError as e:
            logger.error(f"Failed to grant {target.label} on {dashboard.id}: {e.message}")
            return GrantOutcome(ok=False, message=e.message or "Failed to grant access", dashboard=dashboard)
        log_action(logger, "grant", actor=self._actor, entity_type="dashboard", entity_id=dashboard.id, target=target.label)
        if target not in updated.access:
            return GrantOutcome(ok=False, message=f"Server did not record access for {target.label}", dashboard=updated)
        return GrantOutcome(ok=True, message=f"Access granted to {target.label}", dashboard=updated)

    def revoke_access(self, dashboard: Dashboard, target: AccessTarget) -> GrantOutcome:
        """Revoke a target; the returned dashboard reflects server-confirmed access."""
        try:
            echoed = self._client.access.revoke(dashboard.id, target)
            updated = self._confirmed(dashboard, echoed)
        except APIError as e:
            logger.error(f"Failed to revoke {target.label} on {dashboard.id}: {e.message}")
            return GrantOutcome(ok=False, message=e.message or "Failed to revoke access", dashboard=dashboard)
        log_action(logger, "revoke", actor=self._actor, entity_type="dashboard", entity_id=dashboard.id, target=target.label)
        if target in updated.access:
            return GrantOutcome(ok=False, message=f"Server still lists access for {target.label}", dashboard=updated)
        return GrantOutcome(ok=True, message=f"Access removed for {target.label}", dashboard=updated)


__all__ = [
    "EntitlementResolver",
    "EntitlementResult",
    "GrantOutcome",
    "attach_access",
    "available_targets",
    "candidate_targets",
    "identity_targets",
]

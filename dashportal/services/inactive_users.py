"""Cleanup of users inactive beyond the backend's threshold."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from dashportal.client import APIError, PortalClient
from dashportal.logging_utils import log_action
from dashportal.models.domain import User

logger = logging.getLogger(__name__)


@dataclass
class CleanupReport:
    deleted: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class InactiveUserCleanup:
    """Lists inactive users and removes them one at a time."""

    def __init__(self, client: PortalClient, actor: Optional[str] = None):
        self._client = client
        self._actor = actor
        self.users: List[User] = []
        self.error: Optional[str] = None

    def list_inactive_users(self) -> List[User]:
        try:
            self.users = self._client.users.list_inactive()
            self.error = None
        except APIError as e:
            logger.error(f"Failed to load inactive users: {e.message}")
            self.users = []
            self.error = f"Could not load inactive users: {e.message}"
        return self.users

    def delete_user(self, user_id: str, confirm: bool = False) -> bool:
        """Hard delete; refused without confirm=True."""
        if not confirm:
            self.error = "Confirm deletion of this user; it cannot be undone"
            return False
        try:
            self._client.users.delete(user_id)
        except APIError as e:
            logger.error(f"Failed to delete inactive user {user_id}: {e.message}")
            self.error = f"Could not delete user: {e.message}"
            return False
        log_action(logger, "delete", actor=self._actor, entity_type="user", entity_id=user_id, reason="inactive")
        self.users = [u for u in self.users if u.id != user_id]
        return True

    def delete_all_inactive(self, confirm: bool = False) -> CleanupReport:
        """One DELETE per user, in list order; failures are kept in the list."""
        report = CleanupReport()
        if not confirm:
            self.error = "Confirm deletion of all inactive users; it cannot be undone"
            report.failed = [u.id for u in self.users]
            return report
        for user in list(self.users):
            if self.delete_user(user.id, confirm=True):
                report.deleted.append(user.id)
            else:
                report.failed.append(user.id)
        return report

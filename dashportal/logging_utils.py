# dashportal/logging_utils.py

import logging
import os
import sys
from typing import Any, Optional


def get_logger(name: str = "dashportal") -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def log_action(
    logger: logging.Logger,
    action: str,
    actor: Optional[str] = None,
    entity_type: Optional[str] = None,
    entity_id: Optional[Any] = None,
    **details: Any,
) -> None:
    """
    Emit a single audit line for a user-visible action.

    Args:
        logger: Logger to write to
        action: The action performed (login, logout, create, update, delete, grant, revoke)
        actor: Email of the user performing the action
        entity_type: Type of entity affected (dashboard, team, user)
        entity_id: ID of the entity affected
        **details: Extra key/value context appended to the line
    """
    extra = " ".join(f"{k}={v}" for k, v in details.items() if v is not None)
    logger.info(
        f"[AUDIT] {actor or 'system'}:{action} {entity_type or ''}:{entity_id or ''} {extra}".rstrip()
    )

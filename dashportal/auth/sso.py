"""Single sign-on: credential exchange at login, teardown at logout."""
from __future__ import annotations

import logging
from typing import Optional

from dashportal.auth.session import IdentityWidget, Session, clear_session, get_session, set_session
from dashportal.client import PortalClient
from dashportal.logging_utils import log_action

logger = logging.getLogger(__name__)


def complete_sign_in(credential: str, client: PortalClient) -> Session:
    """
    Exchange an identity-provider credential for a portal session.

    Called once per successful external sign-in. The previous session, if
    any, is overwritten wholesale.

    Args:
        credential: Opaque bearer credential (ID token) from the identity provider
        client: API client used for the exchange

    Returns:
        The newly stored Session

    Raises:
        ValueError: If the credential is empty
        APIError: If the backend rejects the credential or is unreachable
    """
    if not credential or not credential.strip():
        raise ValueError("Missing sign-in credential")

    identity = client.auth.exchange(credential.strip())
    session = set_session(
        {
            "email": identity.email,
            "access_level": identity.access_level.value,
            "team": identity.team,
            "name": identity.name,
            "photo_url": identity.photo_url,
        }
    )
    log_action(logger, "login", actor=session.email, access_level=session.access_level, team=session.team or None)
    return session


def sign_out(identity_widget: Optional[IdentityWidget] = None) -> None:
    """Clear the session and tell the identity widget not to auto-select again."""
    email = get_session().email
    clear_session(identity_widget)
    log_action(logger, "logout", actor=email or None)

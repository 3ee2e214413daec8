from __future__ import annotations

import pytest

from dashportal.auth.sso import complete_sign_in, sign_out
from dashportal.client import APIError, ResponseShapeError


class _FakeWidget:
    def __init__(self):
        self.disabled = False

    def disable_auto_select(self):
        self.disabled = True


def test_sign_in_exchanges_token_and_writes_session(backend, client, session_state, read_body):
    backend.on(
        "POST",
        "/auth/sso-firebase",
        body={"user": {"email": "ana@x.com", "accessLevel": "Admin", "team": "Ops", "name": "Ana", "photoUrl": "p.png"}},
    )

    session = complete_sign_in("tok-123", client)

    assert read_body(backend.calls("POST", "/auth/sso-firebase")[0]) == {"firebaseIdToken": "tok-123"}
    assert session.is_admin
    assert session_state["userEmail"] == "ana@x.com"
    assert session_state["photoUrl"] == "p.png"


def test_empty_credential_issues_no_request(backend, client, session_state):
    with pytest.raises(ValueError):
        complete_sign_in("  ", client)
    assert backend.requests == []
    assert session_state == {}


def test_rejected_credential_leaves_session_empty(backend, client, session_state):
    backend.on("POST", "/auth/sso-firebase", status=401, body={"message": "invalid token"})
    with pytest.raises(APIError) as exc_info:
        complete_sign_in("bad", client)
    assert exc_info.value.status_code == 401
    assert exc_info.value.message == "invalid token"
    assert session_state == {}


def test_exchange_without_user_is_shape_error(backend, client, session_state):
    backend.on("POST", "/auth/sso-firebase", body={"success": True})
    with pytest.raises(ResponseShapeError):
        complete_sign_in("tok", client)


def test_sign_out_clears_session(backend, client, session_state):
    backend.on("POST", "/auth/sso-firebase", body={"user": {"email": "u@x.com", "accessLevel": "User"}})
    complete_sign_in("tok", client)
    widget = _FakeWidget()

    sign_out(widget)

    assert session_state == {}
    assert widget.disabled

"""
Pytest configuration and shared fixtures.

HTTP is faked with httpx.MockTransport; Streamlit session state is replaced
by a plain dict so session code runs outside a Streamlit server.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest
import streamlit as st

from dashportal.client import PortalClient


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "ui: marks tests that import Streamlit page modules"
    )


class RecordingBackend:
    """Route table for MockTransport that records every request it serves."""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: List[httpx.Request] = []

    def on(self, method: str, path: str, status: int = 200, body: Any = None, handler=None) -> "RecordingBackend":
        if handler is None:
            def handler(request, _status=status, _body=body):
                if _body is None:
                    return httpx.Response(_status)
                return httpx.Response(_status, json=_body)
        self.routes[(method, path)] = handler
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"success": False, "message": f"no route {request.method} {request.url.path}"})
        return handler(request)

    def calls(self, method: Optional[str] = None, path: Optional[str] = None) -> List[httpx.Request]:
        return [
            r for r in self.requests
            if (method is None or r.method == method) and (path is None or r.url.path == path)
        ]


def body_of(request: httpx.Request) -> Any:
    return json.loads(request.content.decode()) if request.content else None


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def client(backend) -> PortalClient:
    with PortalClient("http://portal.test", transport=httpx.MockTransport(backend)) as c:
        yield c


@pytest.fixture
def session_state(monkeypatch) -> dict:
    state: dict = {}
    monkeypatch.setattr(st, "session_state", state)
    return state


@pytest.fixture
def read_body() -> Callable[[httpx.Request], Any]:
    return body_of

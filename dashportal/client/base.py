"""
Shared HTTP client utilities for the portal backend API.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class APIError(Exception):
    """HTTP or transport error from the API (status_code 0 means no response)."""

    status_code: int
    message: str
    response_text: str = ""

    def __str__(self) -> str:  # pragma: no cover
        return f"APIError(status_code={self.status_code}, message={self.message})"


@dataclass(eq=False)
class ResponseShapeError(APIError):
    """Response body does not match the endpoint's contract."""


class BaseHTTPClient:
    """
    Thin wrapper around httpx.Client with consistent auth + error handling.
    """

    def __init__(
        self,
        api_url: str,
        api_key: Optional[str] = None,
        *,
        timeout: float = 30.0,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.api_key = api_key

        final_headers: Dict[str, str] = {
            "Accept": "application/json",
        }
        if headers:
            final_headers.update(headers)

        # Optional auth header (server may ignore it)
        if api_key:
            final_headers.setdefault("Authorization", f"Bearer {api_key}")

        self._client = httpx.Client(
            base_url=self.api_url,
            timeout=timeout,
            headers=final_headers,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "BaseHTTPClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        try:
            resp = self._client.request(method, path, params=params, json=json)
        except httpx.TransportError as exc:
            logger.warning(f"{method} {path} failed before a response: {exc}")
            raise APIError(status_code=0, message=f"Backend unreachable: {exc}") from exc

        if 200 <= resp.status_code < 300:
            # 204 No Content
            if resp.status_code == 204 or not resp.content:
                return None
            try:
                return resp.json()
            except ValueError as exc:
                raise ResponseShapeError(
                    status_code=resp.status_code,
                    message=f"Expected JSON from {method} {path}, got {resp.headers.get('content-type', 'unknown')}",
                    response_text=resp.text or "",
                ) from exc

        # Backend errors look like {"success": false, "message": "..."}; FastAPI-style {"detail": "..."} also accepted
        message = f"Request failed: {method} {path} ({resp.status_code})"
        response_text = ""
        try:
            data = resp.json()
            if isinstance(data, dict) and data.get("message"):
                message = str(data["message"])
            elif isinstance(data, dict) and "detail" in data:
                message = str(data["detail"])
            else:
                response_text = str(data)
        except ValueError:
            response_text = resp.text or ""

        logger.warning(f"{method} {path} returned {resp.status_code}: {message}")
        raise APIError(status_code=resp.status_code, message=message, response_text=response_text)


# ---------------------------------------------------------
#  Response contracts
# ---------------------------------------------------------


def expect_array(payload: Any, endpoint: str) -> List[Any]:
    """Contract: the body is a bare JSON array."""
    if not isinstance(payload, list):
        raise ResponseShapeError(
            status_code=200,
            message=f"{endpoint}: expected a JSON array, got {type(payload).__name__}",
        )
    return payload


def expect_envelope(payload: Any, endpoint: str, key: str = "data") -> Any:
    """
    Contract: {"success": true, <key>: ...}.

    A success=false envelope is reported as an APIError with the backend's message.
    """
    if not isinstance(payload, dict) or "success" not in payload:
        raise ResponseShapeError(
            status_code=200,
            message=f"{endpoint}: expected a {{success, {key}}} envelope",
        )
    if not payload["success"]:
        raise APIError(status_code=200, message=str(payload.get("message") or f"{endpoint} failed"))
    return payload.get(key)


def expect_envelope_array(payload: Any, endpoint: str, key: str = "data") -> List[Any]:
    """Contract: {"success": true, <key>: [...]}."""
    data = expect_envelope(payload, endpoint, key)
    if not isinstance(data, list):
        raise ResponseShapeError(
            status_code=200,
            message=f"{endpoint}: expected '{key}' to be an array",
        )
    return data


def validate_item(model: type, item: Any, endpoint: str) -> Any:
    """Validate one payload item into `model`; invalid items break the contract."""
    try:
        return model.model_validate(item)
    except ValidationError as exc:
        first = exc.errors()[0] if exc.errors() else {}
        where = ".".join(str(p) for p in first.get("loc", ())) or model.__name__
        raise ResponseShapeError(
            status_code=200,
            message=f"{endpoint}: invalid {model.__name__} ({where}: {first.get('msg', 'validation failed')})",
            response_text=str(item),
        ) from exc


def validate_items(model: type, items: List[Any], endpoint: str) -> List[Any]:
    return [validate_item(model, item, endpoint) for item in items]

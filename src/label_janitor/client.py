"""
Label Janitor
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping, Optional

import requests

from label_janitor.config import DEFAULT_API_URL, DEFAULT_TIMEOUT_S, Settings

logger = logging.getLogger(__name__)

_MAX_ERROR_CHARS = 240


class TransportError(RuntimeError):
    """Raised when the GraphQL endpoint cannot be reached or returns an unusable body."""


class ApiError(RuntimeError):
    """Raised when the GraphQL response carries application-level errors."""

    def __init__(self, message: str, errors: Optional[list] = None) -> None:
        super().__init__(message)
        self.errors = errors or []


def _clip(text: str, *, limit: int = _MAX_ERROR_CHARS) -> str:
    text = " ".join(text.split())
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


class GraphQLClient:
    """
    Minimal GraphQL-over-HTTP client for the Linear API.

    One POST per ``execute`` call, no retries. The raw API key goes into the
    ``Authorization`` header; Linear personal keys take no ``Bearer`` prefix.
    """

    def __init__(
        self,
        api_key: str,
        *,
        api_url: str = DEFAULT_API_URL,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_url = api_url
        self.timeout_s = timeout_s
        self._session = session or requests.Session()
        self._headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": api_key,
        }

    @classmethod
    def from_settings(cls, settings: Settings, *, session: Optional[requests.Session] = None) -> "GraphQLClient":
        return cls(settings.api_key, api_url=settings.api_url, timeout_s=settings.timeout_s, session=session)

    def execute(self, query: str, variables: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        payload = {"query": query, "variables": dict(variables or {})}
        try:
            resp = self._session.post(self.api_url, headers=self._headers, json=payload, timeout=self.timeout_s)
        except requests.RequestException as exc:
            raise TransportError(f"request to {self.api_url} failed: {_clip(str(exc))}") from exc

        try:
            body = resp.json()
        except ValueError as exc:
            raise TransportError(
                f"non-JSON response from {self.api_url} (status {resp.status_code}): {_clip(resp.text or '')}"
            ) from exc

        if not isinstance(body, dict):
            raise TransportError(f"unexpected JSON payload from {self.api_url} (status {resp.status_code})")

        # Linear reports GraphQL failures with 4xx statuses, so errors win over the status code.
        errors = body.get("errors")
        if errors:
            raise ApiError(json.dumps(errors), errors=errors if isinstance(errors, list) else [errors])

        if resp.status_code >= 400:
            raise TransportError(f"HTTP {resp.status_code} from {self.api_url}: {_clip(resp.text or '')}")

        data = body.get("data")
        if not isinstance(data, dict):
            raise ApiError("GraphQL response did not include a data object")

        logger.debug("GraphQL call ok (status %s, keys=%s)", resp.status_code, sorted(data))
        return data

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "GraphQLClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

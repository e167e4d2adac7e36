from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Optional

import pytest


def _ensure_src_on_path() -> None:
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if src_path.exists():
        src_str = str(src_path)
        if src_str not in sys.path:
            sys.path.insert(0, src_str)


_ensure_src_on_path()

from label_janitor.client import GraphQLClient  # noqa: E402
from label_janitor.config import Settings  # noqa: E402


class FakeResponse:
    def __init__(self, body: Any = None, *, status_code: int = 200, text: Optional[str] = None) -> None:
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else json.dumps(body)

    def json(self) -> Any:
        if self._body is None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._body


class FakeSession:
    """Replays queued responses (or raises queued exceptions) and records every POST."""

    def __init__(self, responses: Optional[list] = None) -> None:
        self.responses = list(responses or [])
        self.calls: list[dict] = []
        self.closed = False

    def post(self, url: str, *, headers: dict, json: dict, timeout: float):
        self.calls.append({"url": url, "headers": dict(headers), "json": json, "timeout": timeout})
        if not self.responses:
            raise AssertionError("unexpected request")
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    def close(self) -> None:
        self.closed = True

    @property
    def queries(self) -> list[str]:
        return [call["json"]["query"] for call in self.calls]

    @property
    def variables(self) -> list[dict]:
        return [call["json"]["variables"] for call in self.calls]


def _label_node(idx: int, *, used: bool = False, group: bool = False, name: Optional[str] = None) -> dict:
    return {
        "id": f"lbl-{idx}",
        "name": name or f"label-{idx}",
        "isGroup": group,
        "issues": {"nodes": [{"id": f"iss-{idx}"}] if used else []},
    }


def _label_page(nodes: list[dict], *, has_next: bool, cursor: Optional[str] = None) -> FakeResponse:
    return FakeResponse(
        {
            "data": {
                "issueLabels": {
                    "pageInfo": {"hasNextPage": has_next, "endCursor": cursor},
                    "nodes": nodes,
                }
            }
        }
    )


def _delete_response(success: bool = True) -> FakeResponse:
    return FakeResponse({"data": {"issueLabelDelete": {"success": success}}})


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="lin_api_test", api_url="https://linear.test/graphql", timeout_s=5.0)


@pytest.fixture
def make_client(settings: Settings):
    def _make(responses: list) -> tuple[GraphQLClient, FakeSession]:
        session = FakeSession(responses)
        return GraphQLClient.from_settings(settings, session=session), session

    return _make


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def label_node():
    return _label_node


@pytest.fixture
def label_page():
    return _label_page


@pytest.fixture
def delete_response():
    return _delete_response

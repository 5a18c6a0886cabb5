"""
Shared pytest fixtures: an in-memory stand-in for ``requests.Session``.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import pytest
import requests


class StubResponse:
    def __init__(self, *, status_code: int = 200, payload: Any = None, text: str | None = None) -> None:
        self.status_code = status_code
        self._payload = payload
        self._text = text

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self) -> Any:
        if self._text is not None:
            return json.loads(self._text)
        return self._payload


class StubSession:
    """
    Answers GET requests from a ``url -> StubResponse | Exception`` routing table.
    """

    def __init__(self, routes: dict[str, Any]) -> None:
        self.routes = routes
        self.calls: list[tuple[str, dict[str, str], float | None]] = []

    def get(self, url: str, headers: dict[str, str] | None = None, timeout: float | None = None) -> StubResponse:
        self.calls.append((url, dict(headers or {}), timeout))
        outcome = self.routes[url]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture()
def json_response() -> Callable[..., StubResponse]:
    def _build(payload: Any = None, *, status_code: int = 200, text: str | None = None) -> StubResponse:
        return StubResponse(status_code=status_code, payload=payload, text=text)

    return _build


@pytest.fixture()
def stub_session() -> Callable[[dict[str, Any]], StubSession]:
    return StubSession

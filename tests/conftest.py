"""Shared test fixtures for the portal client test suite."""

from __future__ import annotations

import json
import os
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from portal_client.api.base_client import BaseApiClient
from portal_client.api.resource_client import ResourceClient
from portal_client.auth.session import SessionStorage, token_provider
from portal_client.config.settings import PortalSettings

BASE_URL = "http://portal.test/api"


# ---------------------------------------------------------------------------
# Keep the environment from leaking into PortalSettings
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clean_portal_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("PORTAL_"):
            monkeypatch.delenv(key)


@pytest.fixture
def settings() -> PortalSettings:
    return PortalSettings(api_url=BASE_URL)


# ---------------------------------------------------------------------------
# Mock backend
# ---------------------------------------------------------------------------

class MockBackend:
    """Callable handler for ``httpx.MockTransport`` that records requests.

    Responses are served from ``routes`` keyed by ``(method, path)``; any
    other request gets ``default``.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.default: Callable[[httpx.Request], httpx.Response] = lambda _req: httpx.Response(
            200, json={"success": True, "data": None}
        )

    def respond(
        self,
        status_code: int = 200,
        body: Any = None,
        *,
        method: str | None = None,
        path: str | None = None,
        raw: bytes | None = None,
    ) -> None:
        """Register a canned response; without method/path it becomes the default."""

        def _handler(_request: httpx.Request) -> httpx.Response:
            if raw is not None:
                return httpx.Response(status_code, content=raw)
            if body is None:
                return httpx.Response(status_code)
            return httpx.Response(status_code, json=body)

        if method is None or path is None:
            self.default = _handler
        else:
            self.routes[(method.upper(), path)] = _handler

    def fail_with(self, exc: Exception) -> None:
        def _handler(request: httpx.Request) -> httpx.Response:
            raise exc

        self.default = _handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path), self.default)
        return handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def backend() -> MockBackend:
    return MockBackend()


@pytest.fixture
def storage() -> SessionStorage:
    return SessionStorage()


@pytest.fixture
def make_api(backend: MockBackend, storage: SessionStorage) -> Callable[..., BaseApiClient]:
    """Factory for a BaseApiClient wired to the mock backend and session storage."""

    def _make(with_credentials: bool = True, **kwargs: Any) -> BaseApiClient:
        return BaseApiClient(
            BASE_URL,
            with_credentials=with_credentials,
            token_provider=token_provider(storage),
            transport=httpx.MockTransport(backend),
            **kwargs,
        )

    return _make


@pytest.fixture
def make_resource(make_api: Callable[..., BaseApiClient]) -> Callable[..., ResourceClient]:
    """Factory for a ResourceClient sharing a mock-backed transport."""

    def _make(resource_path: str, resource_key: str | None = None) -> ResourceClient:
        return ResourceClient(BASE_URL, resource_path, resource_key=resource_key, api=make_api())

    return _make


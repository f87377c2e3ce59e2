"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import typing as typ

import pytest
import pytest_asyncio
import structlog

from branchhead import runtime
from tests.helpers.github_responses import (
    TEST_ENDPOINT,
    BranchHeadPayloadSpec,
    RecordingTransport,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    import httpx


@pytest.fixture(autouse=True)
def _isolated_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> cabc.Iterator[None]:
    """Keep host configuration and logging setup from leaking between tests."""
    monkeypatch.setenv("BRANCHHEAD_GITHUB_ENDPOINT", TEST_ENDPOINT)
    monkeypatch.delenv("BRANCHHEAD_LOG_LEVEL", raising=False)
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    yield
    structlog.reset_defaults()


@pytest.fixture
def reset_runtime(monkeypatch: pytest.MonkeyPatch) -> None:
    """Forget any previous ``initialize`` call and restore ``sys.excepthook``."""
    monkeypatch.setattr(runtime, "_configured_level", None)
    monkeypatch.setattr("sys.excepthook", runtime.sys.excepthook)


@pytest.fixture
def payload_spec() -> BranchHeadPayloadSpec:
    """Return the default successful branch head payload specification."""
    return BranchHeadPayloadSpec()


class MockGitHub(typ.Protocol):
    """Callable fixture building a recording transport and its client."""

    def __call__(
        self, payload: object, *, status_code: int = 200
    ) -> tuple[RecordingTransport, httpx.AsyncClient]: ...


@pytest_asyncio.fixture
async def mock_github() -> cabc.AsyncIterator[MockGitHub]:
    """Yield a factory for canned GitHub responses; clients close on teardown."""
    clients: list[httpx.AsyncClient] = []

    def _factory(
        payload: object, *, status_code: int = 200
    ) -> tuple[RecordingTransport, httpx.AsyncClient]:
        transport = RecordingTransport.json(payload, status_code=status_code)
        client = transport.client()
        clients.append(client)
        return transport, client

    yield _factory
    for client in clients:
        await client.aclose()

"""Shared test fixtures for the Monerium client.

Provides a factory for clients wired to an :class:`httpx.MockTransport`,
a canned token-endpoint payload, and automatic reset of the global output
manager between tests.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from monerium.client import AsyncMoneriumClient, MoneriumClient
from monerium.output import reset_output

SANDBOX_API = "https://api.monerium.dev"

Handler = Callable[[httpx.Request], httpx.Response]


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager and the CLI log handler after every test.

    Both keep Rich consoles bound to the streams that were active when
    they were created; CliRunner swaps those streams per invocation.
    """
    yield
    reset_output()
    logger = logging.getLogger("monerium")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------


@pytest.fixture
def token_payload() -> dict[str, Any]:
    """A successful ``POST auth/token`` response body."""
    return {
        "access_token": "tok123",
        "token_type": "Bearer",
        "expires_in": 3600,
        "refresh_token": "refresh-abc",
        "profile": "profile-1",
        "userId": "user-1",
    }


# ---------------------------------------------------------------------------
# Clients
# ---------------------------------------------------------------------------


@pytest.fixture
def make_client() -> Callable[[Handler], MoneriumClient]:
    """Return a factory building a sandbox :class:`MoneriumClient` around *handler*."""
    created: list[MoneriumClient] = []

    def _factory(handler: Handler, environment: str = "sandbox") -> MoneriumClient:
        client = MoneriumClient(environment, transport=httpx.MockTransport(handler))
        created.append(client)
        return client

    yield _factory
    for client in created:
        client.close()


@pytest.fixture
def make_async_client() -> Callable[[Handler], AsyncMoneriumClient]:
    """Return a factory building a sandbox :class:`AsyncMoneriumClient` around *handler*."""

    def _factory(handler: Handler, environment: str = "sandbox") -> AsyncMoneriumClient:
        return AsyncMoneriumClient(environment, transport=httpx.MockTransport(handler))

    return _factory

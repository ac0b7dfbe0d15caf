"""
Pytest configuration and shared fixtures.

Provides quiet logging, a local HTTP echo server and small transport doubles.
"""

import asyncio
import os
import sys
from pathlib import Path
from typing import Any

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent))

# Configure test environment
os.environ['ENVIRONMENT'] = 'test'

from rest_manager.exceptions import TransportConnectionFault
from rest_manager.logging import LoggingConfig, configure_logging
from rest_manager.networking.http import RequestSpec, TransportStrategy

from tests.helpers.echo_server import EchoServer, free_port


@pytest.fixture(autouse=True)
def quiet_logging():
    """Every test starts with the quiet test logging config."""
    configure_logging(LoggingConfig.default_test())
    yield
    configure_logging(LoggingConfig.default_test())


@pytest.fixture(scope="session")
def echo_server():
    """Local HTTP server shared by the whole session."""
    with EchoServer() as server:
        yield server


@pytest.fixture
def target(echo_server) -> str:
    return echo_server.url + '/'


@pytest.fixture
def dead_target() -> str:
    """URL on a port nothing listens on."""
    return f"http://127.0.0.1:{free_port()}/"


class FaultyTransport(TransportStrategy):
    """Synchronous transport whose exchange always fails to connect."""

    name = "faulty"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = 0

    def execute(self, request: RequestSpec) -> Any:
        self.calls += 1
        raise TransportConnectionFault(0, f"connection failed for {request.method} {request.resource}")


class AsyncStubTransport(TransportStrategy):
    """Asynchronous transport that yields to the loop, then echoes the resource."""

    name = "async-stub"
    is_async = True

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.requests = []

    def execute(self, request: RequestSpec) -> Any:
        return asyncio.run(self.execute_async(request))

    async def execute_async(self, request: RequestSpec) -> Any:
        self.requests.append(request)
        await asyncio.sleep(0)
        return request.resource


@pytest.fixture
def faulty_transport():
    return FaultyTransport()


@pytest.fixture
def async_stub_transport():
    return AsyncStubTransport()


class PlainTransport(TransportStrategy):
    """Synchronous transport returning the resource without forcing success."""

    name = "plain"

    def execute(self, request: RequestSpec) -> Any:
        return request.resource


@pytest.fixture
def plain_transport():
    return PlainTransport()

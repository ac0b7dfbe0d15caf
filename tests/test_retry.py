"""
Tests for the retry decorator used by the network transports.
"""

import pytest

from rest_manager.config import TransportConfig
from rest_manager.decorators import compute_delay, retry_decorator
from rest_manager.exceptions import (
    TransportConnectionFault, TransportHTTPFault, TransportTimeoutFault
)
from rest_manager.networking.http import SyncRequestsTransport


class TestComputeDelay:

    def test_exponential(self):
        assert [compute_delay(a, "exponential", 0.1, 2.0) for a in (1, 2, 3)] == [0.1, 0.2, 0.4]
        assert compute_delay(10, "exponential", 0.1, 2.0) == 2.0

    def test_linear(self):
        assert compute_delay(3, "linear", 0.5, 10.0) == 1.5
        assert compute_delay(100, "linear", 0.5, 10.0) == 10.0

    def test_fixed(self):
        assert compute_delay(7, "fixed", 0.3, 1.0) == 0.3


class TestSyncRetry:

    def test_retries_until_success(self):
        calls = []

        @retry_decorator(max_attempts=3, base_delay=0)
        def flaky():
            calls.append(1)
            if len(calls) < 3:
                raise TransportConnectionFault(0, "connection failed")
            return "ok"

        assert flaky() == "ok"
        assert len(calls) == 3

    def test_gives_up_after_max_attempts(self):
        calls = []

        @retry_decorator(max_attempts=2, base_delay=0)
        def down():
            calls.append(1)
            raise TransportTimeoutFault(0, "timeout")

        with pytest.raises(TransportTimeoutFault):
            down()
        assert len(calls) == 2

    def test_http_faults_are_not_retried(self):
        calls = []

        @retry_decorator(max_attempts=5, base_delay=0)
        def answered():
            calls.append(1)
            raise TransportHTTPFault(500, "Internal Server Error")

        with pytest.raises(TransportHTTPFault):
            answered()
        assert calls == [1]

    def test_custom_exceptions(self):
        calls = []

        @retry_decorator(max_attempts=2, base_delay=0, exceptions=(KeyError,))
        def lookup():
            calls.append(1)
            raise KeyError("missing")

        with pytest.raises(KeyError):
            lookup()
        assert len(calls) == 2

    def test_preserves_metadata(self):
        @retry_decorator()
        def exchange():
            """Docstring."""

        assert exchange.__name__ == 'exchange'
        assert exchange.__doc__ == 'Docstring.'


class TestAsyncRetry:

    @pytest.mark.asyncio
    async def test_retries_until_success(self):
        calls = []

        @retry_decorator(max_attempts=3, base_delay=0)
        async def flaky():
            calls.append(1)
            if len(calls) < 2:
                raise TransportConnectionFault(0, "connection failed")
            return "ok"

        assert await flaky() == "ok"
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self):
        calls = []

        @retry_decorator(max_attempts=3, base_delay=0)
        async def down():
            calls.append(1)
            raise TransportConnectionFault(0, "connection failed")

        with pytest.raises(TransportConnectionFault):
            await down()
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_single_attempt(self):
        calls = []

        @retry_decorator(max_attempts=1)
        async def once():
            calls.append(1)
            raise TransportConnectionFault(0, "connection failed")

        with pytest.raises(TransportConnectionFault):
            await once()
        assert calls == [1]


class TestRetryArguments:

    @pytest.mark.parametrize("attempts", [0, -1])
    def test_rejects_fewer_than_one_attempt(self, attempts):
        with pytest.raises(ValueError, match='max_attempts'):
            retry_decorator(max_attempts=attempts)

    def test_transport_rejects_unvalidated_config(self):
        with pytest.raises(ValueError):
            SyncRequestsTransport(TransportConfig(max_attempts=0))

"""
Transport tests against a local HTTP server.

The synchronous and asynchronous transports must produce the same response
and dispatch the same callback kind for the same server behavior.
"""

import asyncio

import pytest

from rest_manager.config import TransportConfig
from rest_manager.exceptions import TransportConnectionFault, TransportHTTPFault
from rest_manager.networking.http import (
    AiohttpTransport, JsonResponse, RequestManager, RequestSpec, RestResponse,
    SyncRequestsTransport
)


def collect(manager):
    seen = []
    manager.register('success', lambda resp, man: seen.append(('success', resp)))
    manager.register('error', lambda resp, man: seen.append(('error', resp)))
    return seen


class TestSyncRequestsTransport:

    def test_get_with_query(self, target):
        manager = RequestManager(JsonResponse, SyncRequestsTransport())
        seen = collect(manager)

        response = manager.fetch(target, {'q': 'foo'})

        assert response.okay() is True
        assert response.raw() == {'text': 'hello world', 'q': 'foo', 'method': 'GET'}
        assert [kind for kind, _ in seen] == ['success']

    def test_post_sends_json_body(self, target):
        manager = RequestManager(JsonResponse, SyncRequestsTransport())

        response = manager.fetch(target, {'q': 'bar'}, 'POST')

        assert response.raw() == {'text': 'hello world', 'q': 'bar', 'method': 'POST'}

    def test_server_error_is_error_response(self, target):
        manager = RequestManager(JsonResponse, SyncRequestsTransport())
        seen = collect(manager)

        response = manager.fetch(target + 'error')

        assert response.okay() is False
        assert response.raw() is None
        assert response.message_type() == 'error'
        assert response.message() == 'HTTP 500: Internal Server Error'
        assert [kind for kind, _ in seen] == ['error']

    def test_connection_failure_is_error_response(self, dead_target):
        manager = RequestManager(JsonResponse, SyncRequestsTransport(TransportConfig(timeout=2.0)))
        seen = collect(manager)

        response = manager.fetch(dead_target)

        assert response.okay() is False
        assert response.message() == f'connection failed for GET {dead_target}'
        assert [kind for kind, _ in seen] == ['error']

    def test_execute_raises_transport_faults(self, target, dead_target):
        transport = SyncRequestsTransport()

        with pytest.raises(TransportHTTPFault) as exc_info:
            transport.execute(RequestSpec(resource=target + 'error'))
        assert exc_info.value.status_code == 500
        assert 'error' in exc_info.value.body

        with pytest.raises(TransportConnectionFault):
            transport.execute(RequestSpec(resource=dead_target))

    def test_connection_faults_are_retried(self, dead_target):
        config = TransportConfig(timeout=2.0, max_attempts=3, base_delay=0.0)
        transport = SyncRequestsTransport(config)
        calls = []
        original = transport.session.request

        def counting_request(*args, **kwargs):
            calls.append(args)
            return original(*args, **kwargs)

        transport.session.request = counting_request

        with pytest.raises(TransportConnectionFault):
            transport.execute(RequestSpec(resource=dead_target))
        assert len(calls) == 3

    def test_http_errors_are_not_retried(self, echo_server, target):
        config = TransportConfig(max_attempts=3, base_delay=0.0)
        transport = SyncRequestsTransport(config)
        before = echo_server.request_count

        with pytest.raises(TransportHTTPFault):
            transport.execute(RequestSpec(resource=target + 'error'))
        assert echo_server.request_count - before == 1

    def test_config_headers_are_sent(self):
        transport = SyncRequestsTransport(TransportConfig(headers={'X-Client': 'rest'}))
        request = RequestSpec(resource='http://example.com', headers={'X-Request': '1'})

        assert transport.build_headers(request) == {'X-Client': 'rest', 'X-Request': '1'}

    @pytest.mark.asyncio
    async def test_start_settles_immediately(self, target):
        manager = RequestManager(JsonResponse, SyncRequestsTransport())

        future = manager.start(target, {'q': 'foo'})

        assert future.done()
        response = await future
        assert response.raw()['q'] == 'foo'


class TestAiohttpTransport:

    @pytest.mark.asyncio
    async def test_start_get_with_query(self, target):
        manager = RequestManager(JsonResponse, AiohttpTransport())
        seen = collect(manager)

        future = manager.start(target, {'q': 'foo'})
        assert not future.done()
        response = await future

        assert response.okay() is True
        assert response.raw() == {'text': 'hello world', 'q': 'foo', 'method': 'GET'}
        assert [kind for kind, _ in seen] == ['success']

    @pytest.mark.asyncio
    async def test_start_post(self, target):
        manager = RequestManager(JsonResponse, AiohttpTransport())

        response = await manager.start(target, {'q': 'bar'}, 'POST')

        assert response.raw() == {'text': 'hello world', 'q': 'bar', 'method': 'POST'}

    @pytest.mark.asyncio
    async def test_start_server_error(self, target):
        manager = RequestManager(JsonResponse, AiohttpTransport())
        seen = collect(manager)

        response = await manager.start(target + 'error')

        assert response.okay() is False
        assert response.message() == 'HTTP 500: Internal Server Error'
        assert [kind for kind, _ in seen] == ['error']

    @pytest.mark.asyncio
    async def test_start_connection_failure(self, dead_target):
        manager = RequestManager(JsonResponse, AiohttpTransport(TransportConfig(timeout=2.0)))

        response = await manager.start(dead_target)

        assert response.okay() is False
        assert response.message() == f'connection failed for GET {dead_target}'

    def test_fetch_outside_loop_blocks(self, target):
        manager = RequestManager(JsonResponse, AiohttpTransport())

        response = manager.fetch(target, {'q': 'foo'})

        assert response.raw()['q'] == 'foo'

    @pytest.mark.asyncio
    async def test_fetch_inside_loop_is_refused(self, target):
        manager = RequestManager(JsonResponse, AiohttpTransport())

        with pytest.raises(RuntimeError):
            manager.fetch(target)

    @pytest.mark.asyncio
    async def test_context_manager_reuses_session(self, echo_server, target):
        async with AiohttpTransport() as transport:
            session = transport._session
            manager = RequestManager(JsonResponse, transport)

            first = await manager.start(target, {'q': 'a'})
            second = await manager.start(target, {'q': 'b'})

            assert transport._session is session
            assert [first.raw()['q'], second.raw()['q']] == ['a', 'b']

        assert transport._session is None
        assert session.closed

    @pytest.mark.asyncio
    async def test_concurrent_managers(self, target):
        managers = [RequestManager(JsonResponse, AiohttpTransport()) for _ in range(3)]

        responses = await asyncio.gather(
            *(m.start(target, {'q': str(i)}) for i, m in enumerate(managers))
        )

        assert [r.raw()['q'] for r in responses] == ['0', '1', '2']


class TestTransportParity:
    """Same server behavior gives the same outcome whichever transport runs it."""

    def _outcome(self, response, seen):
        return (response.okay(), response.raw(), response.message(),
                response.message_type(), [kind for kind, _ in seen])

    def _run_both(self, url, payload=None, handler=JsonResponse):
        outcomes = []
        for transport in (SyncRequestsTransport(TransportConfig(timeout=2.0)),
                          AiohttpTransport(TransportConfig(timeout=2.0))):
            manager = RequestManager(handler, transport)
            seen = collect(manager)
            response = manager.fetch(url, payload or {})
            outcomes.append(self._outcome(response, seen))
        return outcomes

    def test_success_parity(self, target):
        sync_outcome, async_outcome = self._run_both(target, {'q': 'foo'})
        assert sync_outcome == async_outcome
        assert sync_outcome[-1] == ['success']

    def test_server_error_parity(self, target):
        sync_outcome, async_outcome = self._run_both(target + 'error')
        assert sync_outcome == async_outcome
        assert sync_outcome[-1] == ['error']

    def test_connection_failure_parity(self, dead_target):
        sync_outcome, async_outcome = self._run_both(dead_target)
        assert sync_outcome == async_outcome
        assert sync_outcome[2] == f'connection failed for GET {dead_target}'

    def test_scalar_payload_values_parity(self, target):
        sync_outcome, async_outcome = self._run_both(target, {'q': True, 'skip': None})
        assert sync_outcome == async_outcome
        assert sync_outcome[1] == {'text': 'hello world', 'q': 'True', 'method': 'GET'}
        assert sync_outcome[-1] == ['success']

    def test_undecodable_body_parity(self, target):
        sync_outcome, async_outcome = self._run_both(target + 'binary', handler=RestResponse)
        assert sync_outcome == async_outcome
        assert sync_outcome[1] == '\ufffd\ufffd bad'
        assert sync_outcome[-1] == ['success']


class TestRequestFaults:
    """Requests that cannot be sent still end in one error response."""

    @pytest.mark.parametrize("transport_class", [SyncRequestsTransport, AiohttpTransport])
    def test_unencodable_body(self, target, transport_class):
        manager = RequestManager(JsonResponse, transport_class())
        seen = collect(manager)

        response = manager.fetch(target, {'q': object()}, 'POST')

        assert response.okay() is False
        assert response.message().startswith(f'invalid request for POST {target}')
        assert [kind for kind, _ in seen] == ['error']

    @pytest.mark.asyncio
    async def test_start_with_scalar_payload_values(self, target):
        manager = RequestManager(JsonResponse, AiohttpTransport())
        seen = collect(manager)

        response = await manager.start(target, {'q': False, 'skip': None, 'n': [1, 2]})

        assert response.raw()['q'] == 'False'
        assert [kind for kind, _ in seen] == ['success']

    @pytest.mark.asyncio
    async def test_start_with_undecodable_body(self, target):
        manager = RequestManager(RestResponse, AiohttpTransport())
        seen = collect(manager)

        response = await manager.start(target + 'binary')

        assert response.okay() is True
        assert response.raw().endswith(' bad')
        assert [kind for kind, _ in seen] == ['success']

"""
REST Request Manager

Owns the request configuration (resource, payload, method), a response
handler class and a callback registry, and runs exchanges through an injected
transport strategy. Every exchange produces exactly one response object and
dispatches exactly one of the "success" / "error" callback kinds with
(response, manager) before the caller sees the result.

Usage:
    manager = RequestManager(JsonResponse, AiohttpTransport())
    manager.register('success', lambda resp, man: print(resp.raw()))

    response = manager.fetch('http://localhost:8080/', {'q': 'foo'})  # blocking
    future = manager.start('http://localhost:8080/')                 # inside a loop
"""

import asyncio
import copy
from collections.abc import Mapping
from typing import Any, Awaitable, Callable, Dict, Optional, Sequence

from ...exceptions.system import ConfigurationError
from ...exceptions.transport import TransportFault, MalformedResponseFault
from ...logging import LoggerInterface, LoggingTimer, get_logger
from .registry import CallbackRegistry
from .structs import EventKind, HTTPMethod, MANAGER_EVENT_KINDS, RequestSpec
from .transports.base import TransportStrategy
from .transports.echo import EchoTransport
from .utils import assemble_url

ResponseHandler = Callable[[Any], Any]

# Distinguishes "argument omitted" from "argument given as None/empty"
_UNSET = object()


class RequestManager:
    """
    Uniform request/response contract over sync and async transports.

    Not safe for overlapping start()/fetch() calls on one instance: the
    request configuration is shared mutable state. Use one manager per
    in-flight request for concurrency.
    """

    def __init__(
        self,
        response_handler: ResponseHandler,
        transport: Optional[TransportStrategy] = None,
        *,
        logger: Optional[LoggerInterface] = None,
        method: str = HTTPMethod.GET.value,
        headers: Optional[Dict[str, str]] = None
    ):
        self._response_handler = response_handler
        self.transport = transport or EchoTransport()
        self.logger = logger or get_logger('rest.manager')

        self._registry = CallbackRegistry(MANAGER_EVENT_KINDS)

        self._resource: Optional[str] = None
        self._payload: Dict[str, Any] = {}
        self._method: str = HTTPMethod.GET.value
        self._headers = dict(headers or {})
        self._debug = False

        self.method(method)

    def __repr__(self) -> str:
        return f"[rest_manager.{self.transport.name}]"

    def _trace(self, msg: str, **context) -> None:
        if self._debug:
            self.logger.debug(msg, manager=repr(self), **context)

    def debug(self, flag: Any = _UNSET) -> bool:
        """Turn verbose tracing of manager internals on or off."""
        if isinstance(flag, bool):
            self._debug = flag
        return self._debug

    # Callbacks

    def register(self, kind: str, handler: Callable[[Any, 'RequestManager'], Any]) -> None:
        """Register handler(response, manager) for "success" or "error"."""
        self._registry.register(kind, handler)

    # Request configuration

    def resource(self, value: Any = _UNSET) -> Optional[str]:
        """Target resource (URL). Non-string values are ignored."""
        self._trace("resource called", value=None if value is _UNSET else value)
        if isinstance(value, str):
            self._resource = value
        return self._resource

    def payload(self, value: Any = _UNSET) -> Dict[str, Any]:
        """Arguments for the resource. Returns an independent copy."""
        self._trace("payload called", value=None if value is _UNSET else value)
        if isinstance(value, Mapping):
            self._payload = dict(value)
        return copy.deepcopy(self._payload)

    def method(self, value: Any = _UNSET) -> str:
        """HTTP method as a string. HTTPMethod members are accepted."""
        self._trace("method called", value=None if value is _UNSET else value)
        if isinstance(value, HTTPMethod):
            value = value.value
        if isinstance(value, str):
            self._method = value
        return self._method

    def assemble(self) -> str:
        """Resource with the payload appended as a query string."""
        return assemble_url(self.resource() or '', self.payload())

    def _ensure_arguments(self, url: Any, payload: Any, method: Any) -> RequestSpec:
        self._trace("ensure arguments")

        if url is not _UNSET:
            self.resource(url)
        if payload is not _UNSET:
            self.payload(payload)
        if method is not _UNSET:
            self.method(method)

        if not self._resource:
            raise ConfigurationError("must have resource defined", 'resource')

        return RequestSpec(
            resource=self._resource,
            method=self._method,
            payload=self.payload(),
            headers=dict(self._headers) if self._headers else None,
        )

    # Response construction and dispatch

    def _build_response(self, raw: Any = None, fault: Optional[Exception] = None) -> Any:
        if fault is not None:
            response = self._response_handler(None)
            response.okay(False)
            response.message_type('error')
            response.message(str(fault))
            return response

        try:
            response = self._response_handler(raw)
        except (MalformedResponseFault, ValueError, TypeError) as e:
            self.logger.warning("Response handler could not be constructed",
                                handler=getattr(self._response_handler, '__name__', repr(self._response_handler)),
                                error=str(e))
            response = None

        if not response:
            response = self._response_handler(None)
            response.okay(False)
            response.message_type('error')
            response.message('null response')
        elif not response.okay():
            if not response.message_type():
                response.message_type('error')
            if not response.message():
                response.message('bad response')

        return response

    def _apply_callbacks_by_response(self, response: Any) -> None:
        kind = EventKind.SUCCESS if response.okay() else EventKind.ERROR
        self._trace("apply callbacks by response", kind=kind.value)

        if kind is EventKind.ERROR:
            self.logger.warning("Exchange produced error response",
                                resource=self._resource,
                                message=response.message())
        self.logger.counter("rest_manager_requests", transport=self.transport.name, kind=kind.value)

        self._registry.apply(kind.value, (response, self))

    def _complete(self, raw: Any = None, fault: Optional[Exception] = None) -> Any:
        response = self.transport.finalize(self._build_response(raw, fault))
        self._apply_callbacks_by_response(response)
        return response

    def _run_exchange(self, request: RequestSpec) -> Any:
        raw, fault = None, None
        with LoggingTimer(self.logger, "exchange", transport=self.transport.name):
            try:
                raw = self.transport.execute(request)
            except TransportFault as e:
                fault = e
        return self._complete(raw, fault)

    async def _run_exchange_async(self, request: RequestSpec) -> Any:
        raw, fault = None, None
        with LoggingTimer(self.logger, "exchange", transport=self.transport.name):
            try:
                raw = await self.transport.execute_async(request)
            except TransportFault as e:
                fault = e
        return self._complete(raw, fault)

    # Execution

    def fetch(self, url: Any = _UNSET, payload: Any = _UNSET, method: Any = _UNSET) -> Any:
        """
        Run one exchange to completion and return its response.

        Omitted arguments keep the current configuration. Callbacks run
        before this returns; a raising callback propagates to the caller.

        Raises:
            ConfigurationError: If no resource is configured
        """
        request = self._ensure_arguments(url, payload, method)
        self.logger.debug("fetch", resource=request.resource, method=request.method)
        return self._run_exchange(request)

    # Older name for fetch()
    action = fetch

    def start(self, url: Any = _UNSET, payload: Any = _UNSET, method: Any = _UNSET) -> asyncio.Future:
        """
        Begin one exchange and return a future for its response.

        Must be called from a running event loop. With a synchronous
        transport the exchange runs now and the returned future is already
        settled. Callbacks run before the future settles; a raising callback
        rejects the future with that exception.

        Raises:
            ConfigurationError: If no resource is configured (before any future exists)
        """
        request = self._ensure_arguments(url, payload, method)
        loop = asyncio.get_running_loop()
        self.logger.debug("start", resource=request.resource, method=request.method)

        if self.transport.is_async:
            return loop.create_task(self._run_exchange_async(request))

        future = loop.create_future()
        try:
            future.set_result(self._run_exchange(request))
        except Exception as e:
            future.set_exception(e)
        return future

    async def run_promise_functions(
        self,
        promise_functions: Sequence[Callable[[], Awaitable[Any]]],
        accumulator: Callable[[Any, 'RequestManager'], Any],
        on_finish: Callable[['RequestManager'], Any],
        on_error: Callable[[Exception, 'RequestManager'], Any]
    ) -> None:
        """
        Run future-producing steps strictly one at a time.

        Each resolved response goes to accumulator(response, manager) before
        the next step starts. on_finish(manager) runs once after the last
        step. The first fault, raised by a step, its future or the
        accumulator, stops the sequence and goes to on_error(exc, manager);
        on_finish is then never called. An error response is not a fault.
        """
        for index, step in enumerate(promise_functions):
            try:
                response = await step()
                accumulator(response, self)
            except Exception as e:
                self.logger.warning("Sequential run stopped on fault",
                                    step=index, error_type=type(e).__name__, error=str(e))
                on_error(e, self)
                return

        on_finish(self)

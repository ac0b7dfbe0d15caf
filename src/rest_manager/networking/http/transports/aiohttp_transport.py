"""
Asynchronous Transport

Non-blocking exchanges through aiohttp. Entered as an async context manager
the transport keeps one session for all exchanges; otherwise each exchange
opens and closes its own session.
"""

import asyncio
from typing import Any, Optional

import aiohttp
import msgspec

from ....config.structs import TransportConfig
from ....decorators.retry import retry_decorator
from ....exceptions.transport import (
    TransportFault, TransportConnectionFault, TransportTimeoutFault, TransportHTTPFault
)
from ....logging import LoggerInterface
from ..structs import RequestSpec
from ..utils import decode_body, query_params
from .base import TransportStrategy


class AiohttpTransport(TransportStrategy):
    """Asynchronous transport; completion is signalled by the event loop."""

    name = "aiohttp"
    is_async = True

    def __init__(self, config: Optional[TransportConfig] = None,
                 logger: Optional[LoggerInterface] = None):
        super().__init__(config, logger)
        self._session: Optional[aiohttp.ClientSession] = None
        self._exchange = retry_decorator(
            max_attempts=self.config.max_attempts,
            base_delay=self.config.base_delay,
            max_delay=self.config.max_delay,
        )(self._exchange_once)

    def _create_session(self) -> aiohttp.ClientSession:
        return aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.config.timeout),
            json_serialize=lambda obj: msgspec.json.encode(obj).decode('utf-8'),
        )

    async def __aenter__(self):
        if self._session is None or self._session.closed:
            self._session = self._create_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    def execute(self, request: RequestSpec) -> Any:
        """Run one exchange to completion on a private event loop."""
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self._execute_detached(request))
        raise RuntimeError(
            "AiohttpTransport.execute() cannot block inside a running event loop; use start()"
        )

    async def _execute_detached(self, request: RequestSpec) -> Any:
        # A session is bound to the loop it was created on
        async with self._create_session() as session:
            return await self._exchange(session, request)

    async def execute_async(self, request: RequestSpec) -> Any:
        if self._session is not None and not self._session.closed:
            return await self._exchange(self._session, request)
        async with self._create_session() as session:
            return await self._exchange(session, request)

    async def _exchange_once(self, session: aiohttp.ClientSession, request: RequestSpec) -> str:
        headers = self.build_headers(request)
        kwargs = {'headers': headers}
        if request.sends_body:
            kwargs['json'] = request.payload
        else:
            kwargs['params'] = query_params(request.payload)

        try:
            async with session.request(request.method, request.resource, **kwargs) as response:
                text = decode_body(await response.read(), response.charset)
                if response.status >= 400:
                    raise TransportHTTPFault(response.status, response.reason or "error", text)
                return text
        except asyncio.TimeoutError as e:
            self.logger.debug("Exchange timed out", resource=request.resource)
            raise TransportTimeoutFault(0, f"timeout for {request.method} {request.resource}") from e
        except aiohttp.ClientConnectionError as e:
            self.logger.debug("Exchange connection failed", resource=request.resource, error=str(e))
            raise TransportConnectionFault(0, f"connection failed for {request.method} {request.resource}") from e
        except aiohttp.ClientError as e:
            raise TransportFault(0, f"request failed for {request.method} {request.resource}: {e}") from e
        except (TypeError, ValueError) as e:
            raise TransportFault(0, f"invalid request for {request.method} {request.resource}: {e}") from e

"""
Synchronous Transport

Blocking exchanges through requests. The payload travels as a query string
for GET/DELETE and as a msgspec-encoded JSON body for POST/PUT.
"""

from typing import Any, Optional

import msgspec
import requests

from ....config.structs import TransportConfig
from ....decorators.retry import retry_decorator
from ....exceptions.transport import (
    TransportFault, TransportConnectionFault, TransportTimeoutFault, TransportHTTPFault
)
from ....logging import LoggerInterface
from ..structs import RequestSpec
from ..utils import query_params
from .base import TransportStrategy


class SyncRequestsTransport(TransportStrategy):
    """Blocking transport; one requests.Session per transport instance."""

    name = "sync"

    def __init__(self, config: Optional[TransportConfig] = None,
                 logger: Optional[LoggerInterface] = None,
                 session: Optional[requests.Session] = None):
        super().__init__(config, logger)
        self._session = session
        self._exchange = retry_decorator(
            max_attempts=self.config.max_attempts,
            base_delay=self.config.base_delay,
            max_delay=self.config.max_delay,
        )(self._exchange_once)

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def execute(self, request: RequestSpec) -> Any:
        return self._exchange(request)

    def _exchange_once(self, request: RequestSpec) -> str:
        headers = self.build_headers(request)
        kwargs = {'headers': headers, 'timeout': self.config.timeout}

        try:
            if request.sends_body:
                headers.setdefault('Content-Type', 'application/json')
                kwargs['data'] = msgspec.json.encode(request.payload)
            else:
                kwargs['params'] = query_params(request.payload)
            response = self.session.request(request.method, request.resource, **kwargs)
        except requests.Timeout as e:
            self.logger.debug("Exchange timed out", resource=request.resource, error=str(e))
            raise TransportTimeoutFault(0, f"timeout for {request.method} {request.resource}") from e
        except requests.ConnectionError as e:
            self.logger.debug("Exchange connection failed", resource=request.resource, error=str(e))
            raise TransportConnectionFault(0, f"connection failed for {request.method} {request.resource}") from e
        except requests.RequestException as e:
            raise TransportFault(0, f"request failed for {request.method} {request.resource}: {e}") from e
        except (TypeError, ValueError) as e:
            raise TransportFault(0, f"invalid request for {request.method} {request.resource}: {e}") from e

        if response.status_code >= 400:
            raise TransportHTTPFault(response.status_code, response.reason or "error", response.text)

        return response.text

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

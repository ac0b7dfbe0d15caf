"""
Transport Strategy Interface

A transport performs one exchange for a RequestSpec and returns the raw body,
or raises TransportFault when the exchange cannot complete. Building the
response object and dispatching callbacks is the manager's job.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ....config.structs import TransportConfig
from ....logging import LoggerInterface, get_logger
from ..structs import RequestSpec


class TransportStrategy(ABC):
    """
    Strategy for executing a single exchange.

    Synchronous transports implement execute(); the default execute_async()
    runs it inline. Asynchronous transports set is_async and implement
    execute_async().
    """

    name: str = "base"
    is_async: bool = False

    def __init__(self, config: Optional[TransportConfig] = None,
                 logger: Optional[LoggerInterface] = None):
        self.config = config or TransportConfig()
        self.logger = logger or get_logger(f'rest.transport.{self.name}')

    @abstractmethod
    def execute(self, request: RequestSpec) -> Any:
        """
        Perform the exchange to completion.

        Args:
            request: Method, resource, payload and headers for this exchange

        Returns:
            Raw response body

        Raises:
            TransportFault: If the exchange could not complete
        """
        pass

    async def execute_async(self, request: RequestSpec) -> Any:
        return self.execute(request)

    def finalize(self, response: Any) -> Any:
        """Adjust a constructed response before dispatch. Default: unchanged."""
        return response

    def build_headers(self, request: RequestSpec) -> Dict[str, str]:
        headers = dict(self.config.headers or {})
        if request.headers:
            headers.update(request.headers)
        return headers

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"

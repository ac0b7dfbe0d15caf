"""
rest_manager: uniform request manager over pluggable HTTP transports.

    from rest_manager import RequestManager, RestResponse

    manager = RequestManager(RestResponse)
    manager.register('success', lambda resp, man: print(resp.raw()))
    manager.fetch('foo')
"""

from .exceptions import (
    ConfigurationError, UnknownEventKindError, TransportFault, MalformedResponseFault
)
from .config import AppConfig, load_config
from .networking.http import (
    HTTPMethod,
    CallbackRegistry,
    RestResponse,
    JsonResponse,
    TransportStrategy,
    EchoTransport,
    SyncRequestsTransport,
    AiohttpTransport,
    RequestManager,
    create_manager,
    register_transport,
)

__version__ = "1.0.0"

__all__ = [
    'ConfigurationError',
    'UnknownEventKindError',
    'TransportFault',
    'MalformedResponseFault',
    'HTTPMethod',
    'CallbackRegistry',
    'RestResponse',
    'JsonResponse',
    'TransportStrategy',
    'EchoTransport',
    'SyncRequestsTransport',
    'AiohttpTransport',
    'RequestManager',
    'create_manager',
    'register_transport',
    'AppConfig',
    'load_config',
]

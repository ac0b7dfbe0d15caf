from .structs import HTTPMethod, EventKind, RequestSpec
from .registry import CallbackRegistry
from .response import RestResponse, JsonResponse
from .transports import TransportStrategy, EchoTransport, SyncRequestsTransport, AiohttpTransport
from .manager import RequestManager
from .transport_factory import (
    register_transport, get_transport_class, available_transports, create_transport, create_manager
)

__all__ = [
    "HTTPMethod",
    "EventKind",
    "RequestSpec",
    "CallbackRegistry",
    "RestResponse",
    "JsonResponse",
    # Transport strategies
    "TransportStrategy",
    "EchoTransport",
    "SyncRequestsTransport",
    "AiohttpTransport",
    # Manager
    "RequestManager",
    # Factory
    "register_transport",
    "get_transport_class",
    "available_transports",
    "create_transport",
    "create_manager",
]

"""
Transport Strategies

Each strategy performs the network exchange for a RequestManager.
"""

from .base import TransportStrategy
from .echo import EchoTransport
from .sync_request import SyncRequestsTransport
from .aiohttp_transport import AiohttpTransport

__all__ = [
    'TransportStrategy',
    'EchoTransport',
    'SyncRequestsTransport',
    'AiohttpTransport',
]

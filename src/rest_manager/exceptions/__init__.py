from .system import BaseSystemError, ConfigurationError, UnknownEventKindError
from .transport import (
    TransportFault, TransportConnectionFault, TransportTimeoutFault, TransportHTTPFault,
    MalformedResponseFault
)

__all__ = [
    'BaseSystemError',
    'ConfigurationError',
    'UnknownEventKindError',
    'TransportFault',
    'TransportConnectionFault',
    'TransportTimeoutFault',
    'TransportHTTPFault',
    'MalformedResponseFault',
]

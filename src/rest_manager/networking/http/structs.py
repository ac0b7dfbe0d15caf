from enum import Enum
from typing import Any, Dict, Optional

import msgspec


class HTTPMethod(Enum):
    """HTTP methods with their wire string values."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class EventKind(str, Enum):
    """Callback kinds a RequestManager dispatches."""
    SUCCESS = "success"
    ERROR = "error"


MANAGER_EVENT_KINDS = (EventKind.SUCCESS.value, EventKind.ERROR.value)


class RequestSpec(msgspec.Struct, frozen=True):
    """Snapshot of a manager's request configuration for one exchange."""
    resource: str
    method: str = HTTPMethod.GET.value
    payload: Dict[str, Any] = {}
    headers: Optional[Dict[str, str]] = None

    @property
    def sends_body(self) -> bool:
        """POST/PUT carry the payload as a body, everything else as a query string."""
        return self.method.upper() in (HTTPMethod.POST.value, HTTPMethod.PUT.value)

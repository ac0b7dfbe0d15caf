"""
Response Handlers

Wrap the raw result of one exchange and report whether it is usable. A
RequestManager is given a handler class and calls it once per exchange with
the raw payload, or with None when the exchange faulted.

The accessors follow a combined getter/setter convention: called without an
argument they read, called with one they update and return the new value.
"""

from typing import Any, Optional

import msgspec

_UNSET = object()


class RestResponse:
    """
    Base response: the raw payload is kept as-is.

    okay() is True exactly when the raw payload is truthy.
    """

    def __init__(self, raw: Any = None):
        self._raw = None
        self._okay = False
        self._message: Optional[str] = None
        self._message_type: Optional[str] = None

        if raw:
            self._raw = raw
            self._okay = True

    def raw(self) -> Any:
        return self._raw

    def okay(self, value: Any = _UNSET) -> bool:
        if isinstance(value, bool):
            self._okay = value
        return self._okay

    def message(self, value: Any = _UNSET) -> Optional[str]:
        if isinstance(value, str):
            self._message = value
        return self._message

    def message_type(self, value: Any = _UNSET) -> Optional[str]:
        if isinstance(value, str):
            self._message_type = value
        return self._message_type

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(okay={self._okay!r}, "
                f"message_type={self._message_type!r}, message={self._message!r})")


class JsonResponse(RestResponse):
    """
    JSON response: str/bytes payloads are decoded with msgspec.

    Already-decoded dicts and lists are accepted unchanged. A payload that
    does not decode leaves raw() as None and okay() False.
    """

    def __init__(self, raw: Any = None):
        super().__init__(None)

        if raw is None:
            return

        if isinstance(raw, (dict, list)):
            self._raw = raw
            self._okay = True
            return

        try:
            self._raw = msgspec.json.decode(raw)
            self._okay = True
        except (msgspec.DecodeError, TypeError):
            self._okay = False
            self._message_type = 'error'
            self._message = 'unable to parse JSON'

class TransportFault(Exception):
    """Base exception for exchanges that could not complete."""

    def __init__(self, code: int, message: str) -> None:
        self.message = message
        self.status_code = code
        super().__init__(f"HTTP {code}: {message}" if code else message)


# Connection and Infrastructure Errors (Retryable)
class TransportConnectionFault(TransportFault):
    """Network connection errors that may be temporary."""
    pass


class TransportTimeoutFault(TransportFault):
    """Request timeout errors that may be retryable."""
    pass


# Protocol Errors (Non-retryable)
class TransportHTTPFault(TransportFault):
    """The remote end answered with an HTTP error status."""

    def __init__(self, code: int, message: str, body: str = "") -> None:
        super().__init__(code, message)
        self.body = body


class MalformedResponseFault(Exception):
    """Response handler could not build a usable object from the raw payload."""
    pass

from typing import Optional


class BaseSystemError(Exception):
    """Default exception."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(BaseSystemError):
    """Configuration-specific exception for setup errors."""

    def __init__(self, message: str, setting_name: Optional[str] = None):
        self.setting_name = setting_name
        super().__init__(message)


class UnknownEventKindError(BaseSystemError):
    """Callback registration or dispatch for a kind the registry does not declare."""

    def __init__(self, kind: str, known_kinds=()):
        self.kind = kind
        self.known_kinds = tuple(known_kinds)
        super().__init__(f"Unknown event kind '{kind}', expected one of {list(self.known_kinds)}")

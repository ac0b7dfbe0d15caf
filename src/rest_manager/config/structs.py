from typing import Dict, Optional

from msgspec import Struct, field

from ..logging.structs import LoggingConfig


class TransportConfig(Struct, frozen=True):
    """Network transport settings shared by the sync and async transports."""
    timeout: float = 10.0
    max_attempts: int = 1
    base_delay: float = 0.1
    max_delay: float = 2.0
    headers: Optional[Dict[str, str]] = None  # Custom headers to add/override

    def validate(self) -> None:
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0 or self.max_delay < 0:
            raise ValueError("retry delays cannot be negative")


class ManagerConfig(Struct, frozen=True):
    """Defaults applied to a freshly created RequestManager."""
    transport: str = "echo"
    method: str = "GET"
    resource: Optional[str] = None
    headers: Optional[Dict[str, str]] = None


class AppConfig(Struct, frozen=True):
    manager: ManagerConfig = field(default_factory=ManagerConfig)
    transport: TransportConfig = field(default_factory=TransportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig.default_development)

    def validate(self) -> None:
        self.transport.validate()
        self.logging.validate()

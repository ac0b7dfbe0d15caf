"""
Logging configuration structs, loaded from the `logging:` section of the
YAML config or built in code.
"""

from typing import Any, Dict, Optional

import msgspec
from msgspec import Struct

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
VALID_ENVIRONMENTS = ("dev", "test", "staging", "prod")


class BackendConfig(Struct, frozen=True):
    enabled: bool = True
    min_level: str = "INFO"

    def validate(self) -> None:
        if self.min_level.upper() not in VALID_LEVELS:
            raise ValueError(f"Invalid log level: {self.min_level}")


class ConsoleBackendConfig(BackendConfig, frozen=True):
    """stderr output; context is appended as key=value pairs."""
    color: bool = True
    include_context: bool = True
    max_message_length: int = 1000


class FileBackendConfig(BackendConfig, frozen=True):
    """
    File output, text or JSON lines, rotated by size.

    Inside a running event loop records are buffered and written by a
    background task; without a loop each record is written immediately.
    """
    path: str = "logs/rest_manager.log"
    format: str = "text"
    max_size_mb: int = 100
    backup_count: int = 5

    def validate(self) -> None:
        super().validate()
        if self.format not in ("text", "json"):
            raise ValueError(f"Invalid format: {self.format}")
        if self.max_size_mb <= 0:
            raise ValueError("max_size_mb must be positive")
        if self.backup_count < 0:
            raise ValueError("backup_count cannot be negative")


class LoggingConfig(Struct, frozen=True):
    environment: str = "dev"
    console: Optional[ConsoleBackendConfig] = None
    file: Optional[FileBackendConfig] = None
    default_context: Optional[Dict[str, Any]] = None

    def validate(self) -> None:
        if self.environment not in VALID_ENVIRONMENTS:
            raise ValueError(f"Invalid environment: {self.environment}")
        for backend in (self.console, self.file):
            if backend is not None:
                backend.validate()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoggingConfig":
        return msgspec.convert(data, cls)

    @classmethod
    def default_development(cls) -> "LoggingConfig":
        return cls(environment="dev", console=ConsoleBackendConfig(min_level="DEBUG"))

    @classmethod
    def default_test(cls) -> "LoggingConfig":
        return cls(environment="test", console=ConsoleBackendConfig(min_level="WARNING", color=False))

"""
Logging Interfaces

Records, backends and the logger contract used by the request manager and
its transports. A record is either a text line with context or a metric
sample (exchange latency, request counters); backends decide how to render it.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Optional


class LogLevel(IntEnum):
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


class LogType(IntEnum):
    TEXT = 1
    METRIC = 2


@dataclass
class LogRecord:
    timestamp: float
    level: LogLevel
    log_type: LogType
    logger_name: str
    message: str = ""
    context: Dict[str, Any] = field(default_factory=dict)
    metric_name: Optional[str] = None
    metric_value: Optional[float] = None

    @classmethod
    def text(cls, level: LogLevel, logger_name: str, message: str, context: Dict[str, Any]) -> 'LogRecord':
        return cls(time.time(), level, LogType.TEXT, logger_name, message, context)

    @classmethod
    def metric(cls, logger_name: str, name: str, value: float, tags: Dict[str, Any]) -> 'LogRecord':
        # Metrics are informational; a WARNING threshold hides them
        return cls(time.time(), LogLevel.INFO, LogType.METRIC, logger_name,
                   context=tags, metric_name=name, metric_value=value)


class LogBackend(ABC):
    """Output target with its own level threshold and formatting."""

    max_errors = 10

    def __init__(self, name: str, min_level: LogLevel = LogLevel.DEBUG, enabled: bool = True):
        self.name = name
        self.min_level = min_level
        self.enabled = enabled
        self._error_count = 0

    def should_handle(self, record: LogRecord) -> bool:
        return self.enabled and record.level >= self.min_level

    @abstractmethod
    def write(self, record: LogRecord) -> None:
        """Emit one record. Must not raise; failures go through _handle_error."""

    def flush(self) -> None:
        pass

    def _handle_error(self, error: Exception) -> None:
        self._error_count += 1
        if self._error_count >= self.max_errors:
            self.enabled = False
            print(f"Backend {self.name} disabled after {self.max_errors} errors: {error}")


class LoggerInterface(ABC):
    """What components receive as self.logger."""

    @abstractmethod
    def debug(self, msg: str, **context) -> None:
        pass

    @abstractmethod
    def info(self, msg: str, **context) -> None:
        pass

    @abstractmethod
    def warning(self, msg: str, **context) -> None:
        pass

    @abstractmethod
    def error(self, msg: str, **context) -> None:
        pass

    @abstractmethod
    def metric(self, name: str, value: float, **tags) -> None:
        pass

    def latency(self, operation: str, duration_ms: float, **tags) -> None:
        self.metric(f"{operation}_latency_ms", duration_ms, **tags)

    def counter(self, name: str, value: int = 1, **tags) -> None:
        self.metric(f"{name}_count", float(value), **tags)

    def flush(self) -> None:
        pass


class LogRouter:
    """Selects the backends that accept a record."""

    def __init__(self, backends: List[LogBackend]):
        self.backends = backends

    def get_backends(self, record: LogRecord) -> List[LogBackend]:
        return [b for b in self.backends if b.should_handle(record)]

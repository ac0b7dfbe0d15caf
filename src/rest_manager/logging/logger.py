"""
Structured Logger

Dispatches records synchronously to the backends picked by the router.
Records at WARNING and above are also handed to the stdlib logger of the
same name, so host applications see error responses without extra wiring.
"""

import logging
import time
from typing import Any, Dict, List, Optional

from .interfaces import LoggerInterface, LogBackend, LogLevel, LogRecord, LogRouter


class Logger(LoggerInterface):

    def __init__(self, name: str, backends: List[LogBackend], router: Optional[LogRouter] = None,
                 default_context: Optional[Dict[str, Any]] = None):
        self.name = name
        self.backends = backends
        self.router = router or LogRouter(backends)
        self.context: Dict[str, Any] = dict(default_context or {})
        self._py_logger = logging.getLogger(name)

    def _dispatch(self, record: LogRecord) -> None:
        for backend in self.router.get_backends(record):
            backend.write(record)

    def _log(self, level: LogLevel, msg: str, context: Dict[str, Any]) -> None:
        full_context = {**self.context, **context}
        if level >= LogLevel.WARNING:
            extra = f" {full_context}" if full_context else ""
            self._py_logger.log(int(level), f"{msg}{extra}")
        self._dispatch(LogRecord.text(level, self.name, msg, full_context))

    def debug(self, msg: str, **context) -> None:
        self._log(LogLevel.DEBUG, msg, context)

    def info(self, msg: str, **context) -> None:
        self._log(LogLevel.INFO, msg, context)

    def warning(self, msg: str, **context) -> None:
        self._log(LogLevel.WARNING, msg, context)

    def error(self, msg: str, **context) -> None:
        self._log(LogLevel.ERROR, msg, context)

    def metric(self, name: str, value: float, **tags) -> None:
        self._dispatch(LogRecord.metric(self.name, name, value, {**self.context, **tags}))

    def flush(self) -> None:
        for backend in self.backends:
            backend.flush()


class LoggingTimer:
    """
    Times a block and records `<operation>_latency_ms`.

    An exception leaving the block is logged as "<operation> failed" and
    re-raised.
    """

    def __init__(self, logger: LoggerInterface, operation: str, **tags):
        self.logger = logger
        self.operation = operation
        self.tags = tags
        self.start_time: Optional[float] = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration_ms = (time.perf_counter() - self.start_time) * 1000
        self.logger.latency(self.operation, duration_ms, **self.tags)
        if exc_type is not None:
            self.logger.error(f"{self.operation} failed", error_type=exc_type.__name__, **self.tags)

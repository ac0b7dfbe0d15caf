"""
Console Backend

Writes one formatted line per record to stderr, optionally with ANSI colors.
"""

import sys
from datetime import datetime
from typing import Optional, TextIO

from ..interfaces import LogBackend, LogLevel, LogRecord, LogType
from ..structs import ConsoleBackendConfig


class ConsoleBackend(LogBackend):

    def __init__(self, config: ConsoleBackendConfig, name: str = "console",
                 stream: Optional[TextIO] = None):
        if not isinstance(config, ConsoleBackendConfig):
            raise TypeError(f"Expected ConsoleBackendConfig, got {type(config)}")
        super().__init__(name, LogLevel[config.min_level.upper()], config.enabled)
        self.config = config
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved per write so a replaced sys.stderr (pytest capture) is honored
        return self._stream or sys.stderr

    def write(self, record: LogRecord) -> None:
        try:
            self.stream.write(self._format(record) + "\n")
        except (OSError, ValueError) as e:
            self._handle_error(e)

    def flush(self) -> None:
        try:
            self.stream.flush()
        except (OSError, ValueError) as e:
            self._handle_error(e)

    def _format(self, record: LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.timestamp).strftime("%H:%M:%S.%f")[:-3]
        pairs = [f"{k}={v}" for k, v in record.context.items()] if self.config.include_context else []

        if record.log_type == LogType.METRIC:
            body = " ".join([f"{record.metric_name}={record.metric_value}"] + pairs)
        else:
            body = record.message
            if len(body) > self.config.max_message_length:
                body = body[:self.config.max_message_length] + "..."
            if pairs:
                body += " | " + ", ".join(pairs)

        return f"{timestamp} {self._level_name(record.level)} {record.logger_name}: {body}"

    def _level_name(self, level: LogLevel) -> str:
        return level.name


class ColorConsoleBackend(ConsoleBackend):

    COLORS = {
        LogLevel.DEBUG: "\033[36m",
        LogLevel.INFO: "\033[32m",
        LogLevel.WARNING: "\033[33m",
        LogLevel.ERROR: "\033[31m",
        LogLevel.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def _level_name(self, level: LogLevel) -> str:
        return f"{self.COLORS.get(level, '')}{level.name}{self.RESET}"

"""
Structured Logging

Usage:
    from rest_manager.logging import get_logger

    logger = get_logger('rest.manager')
    logger.warning("Exchange produced error response", resource=url)
    logger.counter("rest_manager_requests", kind="error")

    with LoggingTimer(logger, "exchange", transport="aiohttp"):
        ...
"""

from .interfaces import LogLevel, LogType, LogRecord, LogBackend, LogRouter, LoggerInterface
from .logger import Logger, LoggingTimer
from .factory import LoggerFactory, get_logger, configure_logging
from .structs import LoggingConfig, BackendConfig, ConsoleBackendConfig, FileBackendConfig
from .backends import ConsoleBackend, ColorConsoleBackend, FileBackend

__all__ = [
    'LogLevel',
    'LogType',
    'LogRecord',
    'LogBackend',
    'LogRouter',
    'LoggerInterface',
    'Logger',
    'LoggingTimer',
    'LoggerFactory',
    'get_logger',
    'configure_logging',
    'LoggingConfig',
    'BackendConfig',
    'ConsoleBackendConfig',
    'FileBackendConfig',
    'ConsoleBackend',
    'ColorConsoleBackend',
    'FileBackend',
]

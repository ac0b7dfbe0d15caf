"""
Logger Factory

Loggers are cached per name and built from the installed LoggingConfig.
configure_logging() swaps the config; loggers fetched afterwards use it.
"""

import os
from typing import Any, Dict, Optional, Union

from .backends.console import ConsoleBackend, ColorConsoleBackend
from .backends.file import FileBackend
from .interfaces import LoggerInterface
from .logger import Logger
from .structs import LoggingConfig


class LoggerFactory:

    _cached_loggers: Dict[str, LoggerInterface] = {}
    _default_config: Optional[LoggingConfig] = None

    @classmethod
    def create_logger(cls, name: str, config: Optional[LoggingConfig] = None) -> LoggerInterface:
        if name in cls._cached_loggers:
            return cls._cached_loggers[name]

        config = config or cls._get_default_config()

        backends = []
        if config.console and config.console.enabled:
            backend_class = ColorConsoleBackend if config.console.color else ConsoleBackend
            backends.append(backend_class(config.console, 'console'))
        if config.file and config.file.enabled:
            backends.append(FileBackend(config.file, 'file'))

        logger = Logger(name=name, backends=backends, default_context=config.default_context)
        cls._cached_loggers[name] = logger
        return logger

    @classmethod
    def clear_cache(cls) -> None:
        for logger in cls._cached_loggers.values():
            logger.flush()
        cls._cached_loggers.clear()

    @classmethod
    def _get_default_config(cls) -> LoggingConfig:
        if cls._default_config is None:
            if os.getenv('ENVIRONMENT', 'dev') == 'test':
                cls._default_config = LoggingConfig.default_test()
            else:
                cls._default_config = LoggingConfig.default_development()
        return cls._default_config


def get_logger(name: str) -> LoggerInterface:
    return LoggerFactory.create_logger(name)


def configure_logging(config: Union[LoggingConfig, Dict[str, Any]]) -> LoggingConfig:
    """
    Install config as the default for loggers fetched from now on.

    Raises:
        ValueError: If the config does not validate (nothing is changed)
    """
    if isinstance(config, dict):
        config = LoggingConfig.from_dict(config)
    config.validate()

    LoggerFactory.clear_cache()
    LoggerFactory._default_config = config
    return config

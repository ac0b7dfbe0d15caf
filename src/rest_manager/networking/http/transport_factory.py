"""
Transport Factory

Name-based registry of transport strategies and a manager builder driven by
AppConfig. Built-in transports: "echo", "sync", "aiohttp".
"""

from typing import Dict, Optional, Type

from ...config.structs import AppConfig
from ...exceptions.system import ConfigurationError
from ...logging import LoggerInterface, configure_logging, get_logger
from .manager import RequestManager, ResponseHandler
from .transports import TransportStrategy, EchoTransport, SyncRequestsTransport, AiohttpTransport

_transport_registry: Dict[str, Type[TransportStrategy]] = {}


def register_transport(name: str, implementation_class: Type[TransportStrategy]) -> None:
    """Register a transport implementation under name."""
    if not (isinstance(implementation_class, type) and issubclass(implementation_class, TransportStrategy)):
        raise TypeError(f"{implementation_class!r} is not a TransportStrategy subclass")
    _transport_registry[name] = implementation_class
    get_logger('rest.transport.factory').debug(
        "Registered transport", name=name, implementation=implementation_class.__name__
    )


def get_transport_class(name: str) -> Type[TransportStrategy]:
    try:
        return _transport_registry[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown transport '{name}', available: {sorted(_transport_registry)}", 'manager.transport'
        ) from None


def available_transports() -> list:
    return sorted(_transport_registry)


def create_transport(name: str, config: Optional[AppConfig] = None,
                     logger: Optional[LoggerInterface] = None) -> TransportStrategy:
    config = config or AppConfig()
    transport_class = get_transport_class(name)
    return transport_class(config.transport, logger)


def create_manager(response_handler: ResponseHandler, config: Optional[AppConfig] = None,
                   logger: Optional[LoggerInterface] = None) -> RequestManager:
    """
    Build a RequestManager with the transport and defaults named in config.

    Args:
        response_handler: Response handler class used for every exchange
        config: Application config (defaults: echo transport, GET). Its logging
            section is installed before any logger is created.
        logger: Logger injected into the manager and its transport

    Returns:
        Configured RequestManager
    """
    if config is None:
        config = AppConfig()
    else:
        configure_logging(config.logging)
    transport = create_transport(config.manager.transport, config, logger)

    manager = RequestManager(
        response_handler,
        transport,
        logger=logger,
        method=config.manager.method,
        headers=config.manager.headers,
    )
    if config.manager.resource is not None:
        manager.resource(config.manager.resource)

    manager.logger.info("Request manager created", transport=transport.name, method=manager.method())
    return manager


register_transport(EchoTransport.name, EchoTransport)
register_transport(SyncRequestsTransport.name, SyncRequestsTransport)
register_transport(AiohttpTransport.name, AiohttpTransport)

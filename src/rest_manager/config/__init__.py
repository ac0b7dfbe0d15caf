from .structs import TransportConfig, ManagerConfig, AppConfig
from .config_manager import load_config, parse_config, substitute_env_vars

__all__ = [
    'TransportConfig',
    'ManagerConfig',
    'AppConfig',
    'load_config',
    'parse_config',
    'substitute_env_vars',
]

"""
Configuration Management

YAML-based configuration for request managers, transports and logging.

Key Features:
- YAML files for readability
- ${VAR} and ${VAR:default} environment substitution
- .env loading via python-dotenv
- Type-safe structs (msgspec) with clear errors for bad settings

Usage:
    from rest_manager.config import load_config

    config = load_config()              # REST_MANAGER_CONFIG or config.yaml search
    config = load_config("my.yaml")
    timeout = config.transport.timeout
"""

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import msgspec
import yaml
from dotenv import load_dotenv

from ..exceptions.system import ConfigurationError
from .structs import AppConfig

CONFIG_ENV_VAR = 'REST_MANAGER_CONFIG'
DEFAULT_CONFIG_NAME = 'config.yaml'

ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')
ENV_VAR_DEFAULT_PATTERN = re.compile(r'^([^:]+):(.*)$')


def guess_file_paths(file_name: str) -> List[Path]:
    """Returns a list of possible config file locations to search."""
    return [
        Path.cwd() / file_name,                           # Current working directory
        Path(__file__).parent.parent.parent.parent / file_name,  # Project root
        Path.home() / file_name,                          # User home directory (fallback)
    ]


def substitute_env_vars(value: Any) -> Any:
    """
    Recursively replace ${VAR} and ${VAR:default} in string values.

    Raises:
        ConfigurationError: If a variable without default is not set
    """
    if isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [substitute_env_vars(v) for v in value]
    if not isinstance(value, str):
        return value

    def _replace(match: re.Match) -> str:
        expr = match.group(1)
        default_match = ENV_VAR_DEFAULT_PATTERN.match(expr)
        if default_match:
            name, default = default_match.group(1), default_match.group(2)
            return os.getenv(name, default)
        if expr not in os.environ:
            raise ConfigurationError(f"Environment variable '{expr}' is not set", expr)
        return os.environ[expr]

    substituted = ENV_VAR_PATTERN.sub(_replace, value)
    # A whole-value reference keeps YAML scalar typing (numbers, booleans)
    if substituted != value and ENV_VAR_PATTERN.fullmatch(value):
        return yaml.safe_load(substituted) if substituted else substituted
    return substituted


def find_config_file(path: Optional[Union[str, Path]] = None) -> Optional[Path]:
    if path is not None:
        candidate = Path(path)
        if not candidate.is_file():
            raise ConfigurationError(f"Config file not found: {candidate}", 'path')
        return candidate

    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return find_config_file(env_path)

    for candidate in guess_file_paths(DEFAULT_CONFIG_NAME):
        if candidate.is_file():
            return candidate
    return None


def parse_config(data: Optional[Dict[str, Any]]) -> AppConfig:
    """Convert a raw mapping (already env-substituted) to AppConfig."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config root must be a mapping, got {type(data).__name__}")

    try:
        config = msgspec.convert(data, AppConfig)
        config.validate()
    except (msgspec.ValidationError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
    return config


def load_config(path: Optional[Union[str, Path]] = None) -> AppConfig:
    """
    Load application configuration.

    Without a file on the search path, returns defaults.
    """
    load_dotenv()

    config_path = find_config_file(path)
    if config_path is None:
        return AppConfig()

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse {config_path}: {e}", 'path') from e

    return parse_config(substitute_env_vars(data))

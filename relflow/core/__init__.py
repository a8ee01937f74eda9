"""Core types shared by the release layers."""

from .config import (
    CommandsConfig,
    ConfigError,
    Environment,
    ReleaseConfig,
    load_config,
    load_config_or_default,
)
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "CommandsConfig",
    "ConfigError",
    "Environment",
    "ReleaseConfig",
    "load_config",
    "load_config_or_default",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]

"""Core domain types."""

from .command import (
    CheckoutCommand,
    Command,
    ManifestAction,
    ManifestCommand,
    ResetCommand,
    StatusCommand,
)
from .config import Config, ConfigError, ManifestFormat, load_config
from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # command
    "CheckoutCommand",
    "Command",
    "ManifestAction",
    "ManifestCommand",
    "ResetCommand",
    "StatusCommand",
    # config
    "Config",
    "ConfigError",
    "ManifestFormat",
    "load_config",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]

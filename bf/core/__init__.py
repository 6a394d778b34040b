"""Core types: results, exit codes, configuration and the run context."""

from .config import Config, ConfigError, ProductConfig, RunConfig, load_config, load_config_or_default
from .context import MISSING, Context, OptionValue
from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "Config",
    "ConfigError",
    "ProductConfig",
    "RunConfig",
    "load_config",
    "load_config_or_default",
    # context
    "MISSING",
    "Context",
    "OptionValue",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]

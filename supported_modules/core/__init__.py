"""Core types: configuration, errors, results."""

from .config import ConfigError, PlanningConfig, load_config
from .errors import ErrorCode, InvalidReferenceError, UnresolvableMajorError
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "PlanningConfig",
    "ConfigError",
    "load_config",
    # errors
    "ErrorCode",
    "InvalidReferenceError",
    "UnresolvableMajorError",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]

"""Utility modules."""
from .logger import get_logger, configure_logging, set_range_context
from .exceptions import (
    RewardFlowError,
    ConfigError,
    SourceError,
    ValidationError
)

__all__ = [
    "get_logger",
    "configure_logging",
    "set_range_context",
    "RewardFlowError",
    "ConfigError",
    "SourceError",
    "ValidationError"
]

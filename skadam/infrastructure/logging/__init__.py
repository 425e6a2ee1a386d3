"""
Logging Infrastructure

Structured logging and operation timing.
"""

from .logging_config import (
    LoggingConfigOptions,
    PerformanceLogger,
    get_structured_logger,
    setup_logging,
)

__all__ = [
    "LoggingConfigOptions",
    "PerformanceLogger",
    "get_structured_logger",
    "setup_logging",
]

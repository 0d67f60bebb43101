"""Shared utilities for simple-xml.

This module provides the configuration objects and logging helpers used
across the parser, the writer and the command-line tool.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    ParserConfig,
    SimpleXMLConfig,
    WriterConfig,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "ParserConfig",
    "SimpleXMLConfig",
    "WriterConfig",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
]

# Area: Shared
"""
Shared utilities used across the package.

This package contains:
- Logging configuration
"""

from .logging_config import (
    setup_logging,
    log_error,
    log_and_terminate,
    TerminalFormatter,
    JSONFormatter,
)

__all__ = [
    "setup_logging",
    "log_error",
    "log_and_terminate",
    "TerminalFormatter",
    "JSONFormatter",
]

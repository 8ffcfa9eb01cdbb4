"""Structured logging for g11n.

Exports:
    - configure_logging: Initialize logging
    - get_module_logger: Get logger bound to the calling module
    - logger: Module-level logger instance
"""

from g11n.logging.setup import (
    configure_logging,
    get_module_logger,
    logger,
    _is_test_environment,
)

__all__ = [
    "configure_logging",
    "get_module_logger",
    "logger",
    "_is_test_environment",
]

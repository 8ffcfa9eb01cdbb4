"""Structlog configuration for g11n.

Every g11n module logs through a structlog BoundLogger carrying
``component`` and ``module_path``. Events are snake_case names with
keyword context, e.g. ``logger.warning("translation_missing", key=key)``.

Usage:
    from g11n.logging import configure_logging, get_module_logger

    configure_logging(LoggingSettings(LOG_LEVEL="DEBUG"))
    logger = get_module_logger()
"""

import inspect
import logging
import sys
from typing import List, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.typing import Processor

from g11n.configuration.settings import LoggingSettings

# Stdlib loggers created for g11n modules live under this name
LOGGER_NAMESPACE = "g11n"

# Above CRITICAL: nothing is emitted
SILENT = logging.CRITICAL + 1


def _is_test_environment() -> bool:
    """Detect if running under pytest."""
    return "pytest" in sys.modules


def _build_processors(json_output: bool) -> List[Processor]:
    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def configure_logging(
    settings: Optional[LoggingSettings] = None,
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structlog and the ``g11n`` stdlib logger.

    Under pytest the ``g11n`` logger is silenced regardless of arguments.

    Args:
        settings: Logging settings (default: read from the environment).
        log_level: Override for ``settings.LOG_LEVEL``.
        is_production: Override for ``settings.is_production``; production
            renders JSON lines, otherwise the console renderer is used.

    Returns:
        Root g11n logger.
    """
    settings = settings or LoggingSettings()
    json_output = settings.is_production if is_production is None else is_production
    level_name = (log_level or settings.LOG_LEVEL).upper()

    structlog.configure(
        processors=_build_processors(json_output),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    if _is_test_environment():
        package_logger.setLevel(SILENT)
    else:
        package_logger.setLevel(getattr(logging, level_name, logging.INFO))
        if not package_logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("%(message)s"))
            package_logger.addHandler(handler)
            package_logger.propagate = False

    return structlog.stdlib.get_logger(LOGGER_NAMESPACE)


logger: BoundLogger = configure_logging()


def get_module_logger() -> BoundLogger:
    """Get a logger named after the calling module.

    Binds ``component`` (last dotted segment) and ``module_path``.

    Example:
        # In g11n/i18n/store.py
        logger = get_module_logger()
        # context: {"component": "store", "module_path": "g11n.i18n.store"}
    """
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    module = inspect.getmodule(caller) if caller is not None else None
    if module is None:
        return logger.bind(component="unknown")

    module_name = module.__name__
    return structlog.stdlib.get_logger(module_name).bind(
        component=module_name.split(".")[-1],
        module_path=module_name,
    )

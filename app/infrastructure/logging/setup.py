"""Structlog configuration and logger setup.

Usage:
    from infrastructure.logging import get_module_logger

    logger = get_module_logger()
    logger.info("dispatch_completed", recipients=3)

Logging is configured once on import from the environment settings; the
server lifespan may call ``configure_logging`` again with explicit overrides.
"""

import inspect
import logging
import sys
from typing import List, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.typing import Processor

from infrastructure.configuration import Settings
from infrastructure.logging.formatters import (
    add_app_info,
    mask_sensitive_data,
    truncate_large_values,
)

SILENT_LEVEL = logging.CRITICAL + 1

CALLSITE_PARAMETERS = [
    structlog.processors.CallsiteParameter.FILENAME,
    structlog.processors.CallsiteParameter.LINENO,
    structlog.processors.CallsiteParameter.FUNC_NAME,
]


def _is_test_environment() -> bool:
    return "pytest" in sys.modules


def _build_processors(settings: Settings, json_output: bool) -> List[Processor]:
    """Processor chain shared by console and JSON output.

    Secrets are masked before truncation so a cut value never leaks a
    partial key.
    """
    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(parameters=CALLSITE_PARAMETERS),
        add_app_info(settings.APP_NAME, settings.GIT_SHA),
        mask_sensitive_data(),
        truncate_large_values(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def _apply(processors: List[Processor], level: int) -> BoundLogger:
    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", level=level, force=True)
    return structlog.stdlib.get_logger()


def configure_logging(
    settings: Optional[Settings] = None,
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structlog for the process.

    Console output in development, one JSON object per line in production.
    Under pytest all output is suppressed.

    Args:
        settings: Settings to read ``LOG_LEVEL``/``PREFIX`` from. Loaded from
            the environment when omitted.
        log_level: Override for the log level.
        is_production: Override for JSON vs console output.

    Returns:
        Configured logger instance
    """
    if _is_test_environment():
        logging.root.setLevel(SILENT_LEVEL)
        return _apply(
            [
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            SILENT_LEVEL,
        )

    if settings is None:
        settings = Settings()
    json_output = settings.is_production if is_production is None else is_production
    level_name = (log_level or settings.LOG_LEVEL).upper()

    return _apply(
        _build_processors(settings, json_output),
        getattr(logging, level_name, logging.INFO),
    )


logger: BoundLogger = configure_logging()


def get_module_logger() -> BoundLogger:
    """Get a logger bound to the calling module.

    Binds ``component`` (last dotted segment) and ``module_path``.

    Example:
        # In infrastructure/notifications/dispatcher.py
        logger = get_module_logger()
        # context: {"component": "dispatcher",
        #           "module_path": "infrastructure.notifications.dispatcher"}
    """
    current_frame = inspect.currentframe()
    caller = current_frame.f_back if current_frame is not None else None
    module = inspect.getmodule(caller) if caller is not None else None
    if module is None:
        return logger.bind(component="unknown")

    return logger.bind(
        component=module.__name__.split(".")[-1],
        module_path=module.__name__,
    )

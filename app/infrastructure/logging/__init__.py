"""Structured logging infrastructure (structlog).

Public API:
    - configure_logging(): Initialize logging for the process
    - get_module_logger(): Get a logger for the calling module
    - bind_request_context(): Context manager for request-scoped logging
    - get_correlation_id(): Current correlation id

Example:
    from infrastructure.logging import get_module_logger

    logger = get_module_logger()
    logger.info("template_rendered", slug="employee_monthly_payslip_summary")
"""

from infrastructure.logging.setup import (
    configure_logging,
    get_module_logger,
)
from infrastructure.logging.context import (
    CORRELATION_ID_HEADER,
    bind_request_context,
    get_correlation_id,
)
from infrastructure.logging.formatters import (
    add_app_info,
    mask_sensitive_data,
    truncate_large_values,
    SENSITIVE_PATTERNS,
)

__all__ = [
    "configure_logging",
    "get_module_logger",
    "CORRELATION_ID_HEADER",
    "bind_request_context",
    "get_correlation_id",
    "add_app_info",
    "mask_sensitive_data",
    "truncate_large_values",
    "SENSITIVE_PATTERNS",
]

"""Structlog processors used by the logging pipeline."""

from typing import Any

# Key fragments whose values never reach the log output. Provider configs
# carry SMTP passwords, gateway secrets and API keys; push carries tokens.
SENSITIVE_PATTERNS = frozenset(
    {
        "password",
        "pass",
        "secret",
        "token",
        "api_key",
        "apikey",
        "authorization",
        "credential",
        "private_key",
    }
)


def add_app_info(app_name: str, app_version: str = "unknown"):
    """Create a processor that stamps application name and version."""

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict["app_name"] = app_name
        event_dict["app_version"] = app_version
        return event_dict

    return processor


def mask_sensitive_data(
    mask_value: str = "***REDACTED***",
    additional_patterns: frozenset[str] | None = None,
):
    """Create a processor that masks values of sensitive keys.

    Matching is case insensitive on key substrings. Nested dicts (a provider
    config logged as a whole, for instance) are masked recursively.

    Args:
        mask_value: Replacement for sensitive values.
        additional_patterns: Extra key fragments to treat as sensitive.

    Returns:
        A structlog processor function.
    """
    patterns = SENSITIVE_PATTERNS
    if additional_patterns:
        patterns = patterns | additional_patterns

    def _mask(values: dict[str, Any]) -> dict[str, Any]:
        masked = {}
        for key, value in values.items():
            if value is not None and any(p in str(key).lower() for p in patterns):
                masked[key] = mask_value
            elif isinstance(value, dict):
                masked[key] = _mask(value)
            else:
                masked[key] = value
        return masked

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        return _mask(event_dict)

    return processor


def truncate_large_values(max_length: int = 500):
    """Create a processor that truncates long string values.

    Rendered message bodies can be long; only a prefix is kept.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = (
                    value[:max_length] + f"...[truncated, {len(value)} chars total]"
                )
        return event_dict

    return processor

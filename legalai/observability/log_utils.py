"""
Structured logging helpers.

Context passed as keyword arguments is flattened into LogRecord extras.
Values are rendered to short strings first so that large model payloads
or document text never end up in a log line verbatim.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import enum
import logging
from typing import Any
from uuid import UUID

DEFAULT_MAX_LENGTH = 500


def safe_log_value(value: Any, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """
    Render a value for a log record.

    UUIDs and enums render as their plain value, collections as a size
    summary. Long strings are truncated with the original length appended.

    Args:
        value: Value to render
        max_length: Maximum rendered length before truncation

    Returns:
        str: Rendered value
    """
    if value is None:
        return "None"
    if isinstance(value, enum.Enum):
        text = str(value.value)
    elif isinstance(value, UUID):
        text = str(value)
    elif isinstance(value, (list, tuple, set)):
        text = f"{type(value).__name__}({len(value)} items)"
    elif isinstance(value, dict):
        text = f"dict({len(value)} keys)"
    else:
        try:
            text = str(value)
        except Exception as e:
            return f"<unable to log: {type(e).__name__}>"

    if len(text) > max_length:
        return f"{text[:max_length]}... (truncated, {len(text)} total)"
    return text


def _render_context(context: dict[str, Any]) -> dict[str, str]:
    return {key: safe_log_value(value) for key, value in context.items()}


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message with rendered keyword context as record extras.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Fields attached to the record (run_id, version_id, ...)
    """
    logger.log(level, message, extra=_render_context(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context,
) -> None:
    """
    Log an exception at ERROR with its traceback and rendered context.

    The record carries error_type and error_msg; domain exceptions also
    expose their details dict as error_details.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception being reported
        **context: Fields attached to the record
    """
    extra = _render_context(context)
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(getattr(exc, "message", None) or str(exc))
    details = getattr(exc, "details", None)
    if isinstance(details, dict) and details:
        extra["error_details"] = safe_log_value(
            ", ".join(f"{k}={safe_log_value(v, 100)}" for k, v in details.items())
        )
    logger.error(message, exc_info=exc, extra=extra)

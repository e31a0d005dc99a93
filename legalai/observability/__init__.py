"""
Observability module.

Provides logging configuration, structured logging helpers,
and correlation ID tracking.
"""

from legalai.observability.correlation import get_correlation_id, set_correlation_id
from legalai.observability.logger import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_correlation_id",
    "get_logger",
    "set_correlation_id",
]

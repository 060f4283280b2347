"""
Observability module.

Provides structured logging configuration, log helpers and
correlation ID tracking.
"""

from flowshare.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from flowshare.observability.logger import configure_logging

__all__ = [
    "clear_correlation_id",
    "configure_logging",
    "get_correlation_id",
    "set_correlation_id",
]

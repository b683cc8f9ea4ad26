"""Logging facade."""

from .logging import (
    ContextualFormatter,
    configure_logging,
    current_log_context,
    get_logger,
    log_context,
)

__all__ = [
    "ContextualFormatter",
    "configure_logging",
    "current_log_context",
    "get_logger",
    "log_context",
]

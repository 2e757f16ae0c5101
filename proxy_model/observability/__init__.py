"""
Observability components.

Structured logging driven by the model lifecycle events.
"""

from .logging import (ContextualLoggerAdapter, attach_access_logging,
                      clear_model_context, get_logger, get_logging_context,
                      log_operation, set_model_context)

__all__ = [
    "ContextualLoggerAdapter",
    "attach_access_logging",
    "clear_model_context",
    "get_logger",
    "get_logging_context",
    "log_operation",
    "set_model_context",
]

"""
Logging utilities for proxy_model.

The access engine never logs. Diagnostics flow through the lifecycle event
channel; ``attach_access_logging`` turns those events into structured log
records for a given model.
"""

import contextvars
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from ..constants import (EVENT_DELETE, EVENT_DESCRIBE, EVENT_GET, EVENT_HAS,
                         EVENT_OWN_KEYS, EVENT_SET)
from ..core.types import AccessContext

# Context variable for the model being worked on
_model_context: contextvars.ContextVar[dict[str, Any] | None] = contextvars.ContextVar(
    "model_context", default=None
)


def set_model_context(model_name: str | None = None, **kwargs: Any) -> None:
    """
    Set model context for logging.

    Args:
        model_name: Model class or collection name
        **kwargs: Additional context (document id, request id, etc.)
    """
    _model_context.set({"model_name": model_name, **kwargs})


def clear_model_context() -> None:
    """Clear model context."""
    _model_context.set(None)


def get_logging_context() -> dict[str, Any]:
    """Current logging context: a timestamp plus any model context."""
    context: dict[str, Any] = {
        "timestamp": datetime.now().isoformat(),
    }

    model_context = _model_context.get()
    if model_context:
        context.update(model_context)

    return context


class ContextualLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that automatically adds context to log records.
    """

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        context = get_logging_context()

        extra = kwargs.get("extra", {})
        if extra:
            context.update(extra)

        kwargs["extra"] = context
        return msg, kwargs


def get_logger(name: str) -> ContextualLoggerAdapter:
    """
    Get a contextual logger.

    Args:
        name: Logger name (typically __name__)
    """
    return ContextualLoggerAdapter(logging.getLogger(name), {})


def log_operation(
    logger: logging.Logger | logging.LoggerAdapter,
    operation: str,
    level: int = logging.INFO,
    success: bool = True,
    **context: Any,
) -> None:
    """
    Log an operation with structured context.

    Args:
        logger: Logger instance
        operation: Operation name
        level: Log level
        success: Whether operation succeeded
        **context: Additional context
    """
    log_context = get_logging_context()
    log_context.update({"operation": operation, "success": success})
    if context:
        log_context.update(context)

    message = f"Operation: {operation}"
    if not success:
        message = f"Operation failed: {operation}"

    logger.log(level, message, extra=log_context)


# Events worth a record; "validate" is covered by the matching "set".
_LOGGED_EVENTS = (EVENT_GET, EVENT_SET, EVENT_HAS, EVENT_OWN_KEYS, EVENT_DESCRIBE, EVENT_DELETE)


def attach_access_logging(
    model: Any,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
    level: int = logging.DEBUG,
) -> Callable[[], None]:
    """
    Log every lifecycle event of ``model``.

    Refused writes are logged at WARNING with ``success=False`` and the
    violation details.

    Returns:
        Callable that detaches the logging listeners again
    """
    logger = logger or get_logger("proxy_model.access")
    model_name = type(model).__name__

    def _listener(event: str) -> Callable[[AccessContext], None]:
        def _log(context: AccessContext) -> None:
            if context.error is not None:
                log_operation(
                    logger,
                    f"{model_name}.{event}",
                    level=logging.WARNING,
                    success=False,
                    key=context.key,
                    violation=context.error.to_dict(),
                )
                return
            extra: dict[str, Any] = {"key": context.key}
            if event == EVENT_OWN_KEYS:
                extra = {"key_count": len(context.keys or ())}
            if event == EVENT_SET:
                extra["done"] = context.done
            log_operation(logger, f"{model_name}.{event}", level=level, **extra)

        return _log

    detachers = [model.on(event, _listener(event)) for event in _LOGGED_EVENTS]

    def detach() -> None:
        for detacher in detachers:
            detacher()

    return detach

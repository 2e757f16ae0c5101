"""
Custom exceptions for proxy_model.

Only construction problems are fatal. Absence of a key and read-only writes
are reported through return values and lifecycle events, never raised by the
named model operations.
"""

from typing import Any, Dict, Optional


class ProxyModelError(RuntimeError):
    """
    Base exception for proxy_model errors.

    Attributes:
        message: Error message
        context: Optional dictionary with additional context (key,
                 model class, etc.)
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            context: Optional dictionary with additional context information
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return formatted error message with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (context: {context_str})"
        return self.message


class ConfigurationError(ProxyModelError):
    """
    Raised when model options are invalid or missing.

    The most common cause is a model built without any usable source.

    Attributes:
        message: Error message
        config_key: Option name that caused the error (if available)
        config_value: Option value that caused the error (if available)
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if config_key:
            context["config_key"] = config_key
        if config_value is not None:
            context["config_value"] = config_value
        super().__init__(message, context=context)
        self.config_key = config_key
        self.config_value = config_value


class ReadonlyPropertyError(ProxyModelError):
    """
    Raised by ``model[key] = value`` when the write was refused.

    The named ``ProxyModel.set()`` never raises; it returns the configured
    outcome instead. This mirrors how a refused assignment surfaces as an
    error only through the assignment syntax.
    """

    def __init__(
        self,
        message: str,
        key: Any = None,
        value: Any = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if key is not None:
            context["key"] = key
        super().__init__(message, context=context)
        self.key = key
        self.value = value


class ConversionError(ProxyModelError):
    """Raised by a type converter that cannot interpret a value."""

    def __init__(
        self,
        message: str,
        converter: Optional[str] = None,
        value: Any = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if converter:
            context["converter"] = converter
        super().__init__(message, context=context)
        self.converter = converter
        self.value = value

"""
Unit tests for custom exceptions.

Tests exception hierarchy and error messages.
"""

import pytest

from proxy_model.exceptions import (ConfigurationError, ConversionError,
                                    ProxyModelError, ReadonlyPropertyError)


class TestExceptionHierarchy:
    """Test exception inheritance hierarchy."""

    def test_proxy_model_error_is_runtime_error(self):
        """Test that ProxyModelError is a RuntimeError."""
        assert isinstance(ProxyModelError("test error"), RuntimeError)

    @pytest.mark.parametrize(
        "error_class", [ConfigurationError, ReadonlyPropertyError, ConversionError]
    )
    def test_subclasses(self, error_class):
        """Test that every error derives from ProxyModelError."""
        error = error_class("failed")
        assert isinstance(error, ProxyModelError)
        assert isinstance(error, RuntimeError)


class TestExceptionMessages:
    """Test exception message formatting."""

    def test_proxy_model_error_message(self):
        """Test the plain message."""
        error = ProxyModelError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.context == {}

    def test_proxy_model_error_with_context(self):
        """Test the message with context."""
        error = ProxyModelError("Something went wrong", context={"key": "level"})
        assert "context:" in str(error)
        assert "key=level" in str(error)

    def test_configuration_error_with_key(self):
        """Test ConfigurationError attributes."""
        error = ConfigurationError("Invalid value", config_key="sources", config_value=[])
        assert error.config_key == "sources"
        assert error.config_value == []
        assert error.context["config_key"] == "sources"

    def test_readonly_property_error(self):
        """Test ReadonlyPropertyError attributes."""
        error = ReadonlyPropertyError("refused", key="level", value=50)
        assert error.key == "level"
        assert error.value == 50
        assert "key=level" in str(error)

    def test_conversion_error(self):
        """Test ConversionError attributes."""
        error = ConversionError("bad", converter="date", value="x")
        assert error.converter == "date"
        assert error.value == "x"
        assert error.context == {"converter": "date"}


class TestExceptionChaining:
    """Test exception chaining."""

    def test_exception_chaining(self):
        """Test that exceptions can be chained."""
        original_error = ValueError("Original error")
        try:
            try:
                raise original_error
            except ValueError as e:
                raise ConfigurationError("Wrapped error") from e
        except ConfigurationError as e:
            assert e.__cause__ is original_error

"""
Unit tests for the logging observer and contextual logging helpers.
"""

import logging

from proxy_model import ProxyModel
from proxy_model.observability.logging import (ContextualLoggerAdapter,
                                               attach_access_logging,
                                               clear_model_context, get_logger,
                                               get_logging_context,
                                               log_operation,
                                               set_model_context)

LOGGER_NAME = "tests.access"


class TestLoggingContext:
    """Test the contextvar-backed logging context."""

    def test_model_context(self):
        """Test setting and clearing model context."""
        set_model_context("users", document_id="1")
        try:
            context = get_logging_context()
            assert context["model_name"] == "users"
            assert context["document_id"] == "1"
            assert "timestamp" in context
        finally:
            clear_model_context()
        assert "model_name" not in get_logging_context()

    def test_get_logger(self):
        """Test the adapter factory."""
        adapter = get_logger(LOGGER_NAME)
        assert isinstance(adapter, ContextualLoggerAdapter)
        assert adapter.logger.name == LOGGER_NAME

    def test_adapter_adds_context(self, caplog):
        """Test that records carry the model context."""
        set_model_context("users")
        try:
            with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
                get_logger(LOGGER_NAME).info("hello", extra={"key": "name"})
        finally:
            clear_model_context()
        record = caplog.records[-1]
        assert record.model_name == "users"
        assert record.key == "name"

    def test_log_operation(self, caplog):
        """Test structured operation records."""
        logger = logging.getLogger(LOGGER_NAME)
        with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
            log_operation(logger, "thing", success=False, key="k")
        record = caplog.records[-1]
        assert record.getMessage() == "Operation failed: thing"
        assert record.operation == "thing"
        assert record.success is False


class TestAccessLogging:
    """Test the lifecycle-event logging observer."""

    def test_operations_are_logged(self, caplog, simple_doc):
        """Test one record per observed operation."""
        model = ProxyModel(simple_doc)
        attach_access_logging(model, logging.getLogger(LOGGER_NAME), level=logging.INFO)

        with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
            model.get("name")
            model.set("name", "Tom")
            model.has("name")
            model.keys()

        messages = [record.getMessage() for record in caplog.records]
        assert messages == [
            "Operation: ProxyModel.get",
            "Operation: ProxyModel.set",
            "Operation: ProxyModel.has",
            "Operation: ProxyModel.ownKeys",
        ]
        assert caplog.records[0].key == "name"
        assert caplog.records[1].done is True
        assert caplog.records[3].key_count == 2

    def test_readonly_violation_logged_as_warning(self, caplog, simple_doc):
        """Test that refused writes are warnings with details."""
        model = ProxyModel(simple_doc, readonly_keys=["level"])
        attach_access_logging(model, logging.getLogger(LOGGER_NAME))

        with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
            model.set("level", 50)

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.getMessage() == "Operation failed: ProxyModel.set"
        assert record.violation["key"] == "level"
        assert record.violation["value"] == 50

    def test_detach(self, caplog, simple_doc):
        """Test that detaching stops logging."""
        model = ProxyModel(simple_doc)
        detach = attach_access_logging(model, logging.getLogger(LOGGER_NAME), level=logging.INFO)
        detach()

        with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
            model.get("name")

        assert caplog.records == []
        assert model.events.listener_count() == 0

    def test_engine_does_not_log_without_observer(self, caplog, simple_doc):
        """Test that plain access produces no records."""
        model = ProxyModel(simple_doc, readonly_keys=["level"])
        with caplog.at_level(logging.DEBUG, logger="proxy_model.core"):
            model.get("name")
            model.set("level", 1)
        assert [r for r in caplog.records if r.name.startswith("proxy_model.core")] == []

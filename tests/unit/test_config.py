"""
Unit tests for ModelOptions and load_options.
"""

import pytest

from proxy_model.config import ModelOptions, load_options
from proxy_model.exceptions import ConfigurationError


class TestModelOptions:
    """Test option validation and derived values."""

    def test_defaults(self):
        """Test documented defaults."""
        options = ModelOptions(data={})
        assert options.enumerate_non_enumerable is False
        assert options.enumerate_symbols is False
        assert options.confirm_delete is True
        assert options.readonly_fail is False
        assert options.readonly_return is None
        assert options.readonly_write_succeeds is True
        assert options.aliases == {}
        assert options.readonly_keys == ()
        assert options.extra_keys == ()

    def test_sources_kept_by_reference(self):
        """Test that documents are not copied."""
        first, second = {"a": 1}, {"b": 2}
        options = ModelOptions(sources=[first, second])
        resolved = options.resolved_sources
        assert resolved[0] is first
        assert resolved[1] is second

    def test_data_becomes_single_source(self):
        """Test the single-source shortcut."""
        doc = {"a": 1}
        assert ModelOptions(data=doc).resolved_sources[0] is doc

    @pytest.mark.parametrize(
        "readonly_fail, readonly_return, expected",
        [
            (False, None, True),
            (True, None, False),
            (True, True, True),
            (False, False, False),
        ],
    )
    def test_readonly_write_succeeds(self, readonly_fail, readonly_return, expected):
        """Test the explicit override, else the inverted toggle."""
        options = ModelOptions(
            data={}, readonly_fail=readonly_fail, readonly_return=readonly_return
        )
        assert options.readonly_write_succeeds is expected

    def test_options_are_frozen(self):
        """Test that options can't change after construction."""
        options = ModelOptions(data={})
        with pytest.raises(Exception):
            options.readonly_fail = True


class TestLoadOptions:
    """Test conversion of validation errors."""

    def test_missing_source(self):
        """Test that a source is required."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_options({})
        assert "No valid 'data' or 'sources'" in str(exc_info.value)

    def test_empty_sources(self):
        """Test that an empty source list is refused."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_options({"sources": []})
        assert exc_info.value.config_key == "sources"

    def test_non_mapping_source(self):
        """Test that every source must be a mapping."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_options({"sources": [{}, "text"]})
        assert exc_info.value.config_key == "sources"
        assert "source #1" in exc_info.value.message

    def test_unknown_option(self):
        """Test that typos are caught."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_options({"data": {}, "readonly_fial": True})
        assert exc_info.value.config_key == "readonly_fial"

    def test_valid(self):
        """Test the happy path."""
        options = load_options({"data": {}, "extra_keys": ["a", "b"]})
        assert options.extra_keys == ("a", "b")

    def test_cause_is_kept(self):
        """Test exception chaining to the pydantic error."""
        from pydantic import ValidationError

        with pytest.raises(ConfigurationError) as exc_info:
            load_options({"sources": []})
        assert isinstance(exc_info.value.__cause__, ValidationError)

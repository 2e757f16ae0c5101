"""
Pytest configuration and shared fixtures for proxy_model tests.

This module provides:
- Sample documents (Extended JSON and plain)
- Model subclasses with declared converters, aliases and read-only keys
- Engine factories wired to plain dict sources
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import pytest

from proxy_model import MongoDB, ProxyModel
from proxy_model.core import (AccessEngine, AliasTable, ConversionRegistry,
                              SourceSet)
from proxy_model.events import EventChannel

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# ============================================================================
# SAMPLE DOCUMENTS
# ============================================================================


@pytest.fixture
def user_doc() -> Dict[str, Any]:
    """A user document in Extended JSON form."""
    return {
        "_id": {"$oid": "1"},
        "name": "Tim",
        "birthday": {"$date": {"$numberLong": "298857600000"}},
        "level": 99,
        "admin": True,
    }


@pytest.fixture
def simple_doc() -> Dict[str, Any]:
    """The minimal record used by the read-only scenario."""
    return {"name": "Tim", "level": 99}


# ============================================================================
# MODEL FIXTURES
# ============================================================================


class User(ProxyModel):
    """Model with Mongo converters, an id alias and a computed property."""

    type_converters = {"_id": MongoDB.ejson_oid, "birthday": MongoDB.ejson_date}
    prop_aliases = {"id": "_id"}
    readonly_props = ["display_name"]
    extra_props = ["display_name"]

    @property
    def display_name(self) -> str:
        return f"{self['name']} (level {self['level']})"


@pytest.fixture
def user_class() -> type:
    return User


@pytest.fixture
def user(user_doc: Dict[str, Any]) -> User:
    return User(user_doc)


@pytest.fixture
def millis_converter() -> Dict[str, Any]:
    """Converter storing datetimes as ``{"millis": n}``."""
    return {
        "get": lambda raw, ctx: EPOCH + timedelta(milliseconds=raw["millis"]),
        "set": lambda value: {"millis": (value - EPOCH) // timedelta(milliseconds=1)},
    }


# ============================================================================
# ENGINE FIXTURES
# ============================================================================


@pytest.fixture
def make_engine():
    """Factory building an AccessEngine over plain dict sources."""

    def _make(
        *sources: Dict[str, Any],
        aliases: Dict[str, str] | None = None,
        converters: Dict[str, Any] | None = None,
        default=None,
        **kwargs: Any,
    ) -> AccessEngine:
        return AccessEngine(
            SourceSet(sources),
            aliases=AliasTable(aliases),
            converters=ConversionRegistry(converters, default),
            events=EventChannel(),
            **kwargs,
        )

    return _make

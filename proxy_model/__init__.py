"""
proxy_model - virtualized records over MongoDB-style documents

Wraps one or more in-memory documents in a single record view with key
aliases, type converters, read-only fields and lifecycle events.
"""

from .config import ModelOptions
from .constants import LIFECYCLE_EVENTS
from .core import (UNDEFINED, AccessContext, AccessEngine, Converter,
                   PropertyDescriptor, ReadonlyViolation)
from .events import EventChannel
from .exceptions import (ConfigurationError, ConversionError,
                         ProxyModelError, ReadonlyPropertyError)
from .model import ProxyModel
from .types import MongoDB

__version__ = "0.2.0"

__all__ = [
    # Model
    "ProxyModel",
    "ModelOptions",
    # Engine
    "AccessEngine",
    "AccessContext",
    "Converter",
    "PropertyDescriptor",
    "ReadonlyViolation",
    "UNDEFINED",
    # Events
    "EventChannel",
    "LIFECYCLE_EVENTS",
    # Converters
    "MongoDB",
    # Errors
    "ProxyModelError",
    "ConfigurationError",
    "ReadonlyPropertyError",
    "ConversionError",
]

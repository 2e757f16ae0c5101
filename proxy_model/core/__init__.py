"""
Property resolution core.

Alias table, conversion registry, source set with resolution cache, and the
access engine tying them together.
"""

from .aliases import AliasTable
from .converters import ConversionRegistry
from .engine import AccessEngine
from .sources import Fallback, ResolutionCache, SourceSet
from .types import (UNDEFINED, AccessContext, Converter, PropertyDescriptor,
                    ReadonlyViolation, is_defined)

__all__ = [
    "AccessEngine",
    "AliasTable",
    "ConversionRegistry",
    "SourceSet",
    "ResolutionCache",
    "Fallback",
    "UNDEFINED",
    "is_defined",
    "AccessContext",
    "Converter",
    "PropertyDescriptor",
    "ReadonlyViolation",
]

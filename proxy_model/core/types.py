"""
Shared types for the property resolution engine.
"""

from collections.abc import Callable, Hashable, Mapping
from dataclasses import dataclass, field
from typing import Any


class _Undefined:
    """Marker for "no value here". ``None`` is a real value."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __reduce__(self):
        return (_Undefined, ())


UNDEFINED = _Undefined()


def is_defined(value: Any) -> bool:
    """Return True unless ``value`` is the UNDEFINED marker."""
    return value is not UNDEFINED


@dataclass(frozen=True)
class Converter:
    """
    Bidirectional value transform for a single field.

    ``get(raw, context)`` turns a stored value into the API value;
    ``set(value)`` turns an API value into the stored value. ``all(context)``
    is a per-field read transform used when there is no ``get``. Any side
    may be omitted.
    """

    get: Callable[[Any, "AccessContext"], Any] | None = None
    set: Callable[[Any], Any] | None = None
    all: Callable[["AccessContext"], Any] | None = None

    @classmethod
    def from_spec(cls, spec: Any) -> "Converter":
        """
        Normalize a converter declaration.

        Accepts a Converter, a mapping with ``get``/``set``/``all`` entries,
        or any object exposing those attributes.

        Raises:
            TypeError: If the declaration has none of them
        """
        if isinstance(spec, Converter):
            return spec
        if isinstance(spec, Mapping):
            converter = cls(get=spec.get("get"), set=spec.get("set"), all=spec.get("all"))
        else:
            converter = cls(
                get=getattr(spec, "get", None),
                set=getattr(spec, "set", None),
                all=getattr(spec, "all", None),
            )
        if converter.get is None and converter.set is None and converter.all is None:
            raise TypeError(f"Not a converter: {spec!r}")
        return converter


@dataclass(frozen=True)
class ReadonlyViolation:
    """Diagnostic record for a refused write."""

    key: Hashable
    value: Any
    sources: tuple[Mapping, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "readonly property",
            "key": self.key,
            "value": self.value,
            "source_count": len(self.sources),
        }


@dataclass
class PropertyDescriptor:
    """
    Description of a single record property.

    Data properties carry ``value``; computed ones carry ``getter`` and
    optionally ``setter``.
    """

    value: Any = UNDEFINED
    writable: bool = True
    enumerable: bool = True
    configurable: bool = True
    getter: Callable[[Any], Any] | None = None
    setter: Callable[[Any, Any], None] | None = None

    @property
    def is_accessor(self) -> bool:
        return self.getter is not None or self.setter is not None


@dataclass
class AccessContext:
    """
    Mutable payload passed to lifecycle observers during one operation.

    ``raw`` is what the operation started from and ``value`` is what it
    produces. For ``get`` that is the stored value and the converted value
    returned to the caller. For ``set`` it is the value the caller passed
    and the converted value that gets stored.

    Observers may rewrite ``value`` (and for writes ``key`` and ``done``)
    before the engine reads it back.
    """

    operation: str
    key: Hashable = None
    requested_key: Hashable = None
    raw: Any = UNDEFINED
    value: Any = UNDEFINED
    source: Any = None
    done: bool = False
    error: ReadonlyViolation | None = None
    keys: list[Hashable] | None = None
    model: Any = field(default=None, repr=False)

"""
ProxyModel: the virtualized record exposed to calling code.

A ProxyModel wraps one or more backing mappings (e.g. MongoDB documents) and
routes every access through the AccessEngine, which applies key aliases,
type converters, read-only rules and lifecycle events.

Subclasses declare their capabilities as class attributes (or properties),
read once at construction:

    class User(ProxyModel):
        type_converters = {"_id": MongoDB.oid, "birthday": MongoDB.date}
        prop_aliases = {"id": "_id"}
        readonly_props = ["age"]

        @property
        def age(self):
            ...

    user = User({"_id": ObjectId(), "name": "Tim"})
    user["name"]            # "Tim"
    user.set("age", 3)      # refused, returns the configured outcome
"""

import inspect
import logging
from collections.abc import Callable, Hashable, Iterator, Mapping
from typing import Any, ClassVar

from .config import ModelOptions, load_options
from .core import (UNDEFINED, AccessEngine, AliasTable, ConversionRegistry,
                   PropertyDescriptor, SourceSet, is_defined)
from .events import EventChannel, Listener
from .exceptions import ReadonlyPropertyError
from .utils.mongo import clean_mongo_doc

logger = logging.getLogger(__name__)

# Class attribute -> option it fills in.
CAPABILITIES: dict[str, str] = {
    "type_converters": "converters",
    "default_converter": "default_converter",
    "prop_aliases": "aliases",
    "readonly_props": "readonly_keys",
    "extra_props": "extra_keys",
}


class _AttributeFallback:
    """
    Computed attributes declared by a ProxyModel subclass.

    Names defined on ProxyModel itself and callables (methods) are not
    record properties.
    """

    __slots__ = ("_model",)

    def __init__(self, model: "ProxyModel"):
        self._model = model

    def _declared(self, key: Any) -> Any:
        if not isinstance(key, str) or key.startswith("_") or hasattr(ProxyModel, key):
            return UNDEFINED
        try:
            attr = inspect.getattr_static(type(self._model), key)
        except AttributeError:
            return UNDEFINED
        if isinstance(attr, (staticmethod, classmethod)) or inspect.isfunction(attr):
            return UNDEFINED
        return attr

    def lookup(self, key: Any) -> Any:
        if self._declared(key) is UNDEFINED:
            return UNDEFINED
        return getattr(self._model, key)

    def contains(self, key: Any) -> bool:
        return self._declared(key) is not UNDEFINED

    def describe(self, key: Any) -> PropertyDescriptor | None:
        attr = self._declared(key)
        if attr is UNDEFINED:
            return None
        if isinstance(attr, property):
            return PropertyDescriptor(
                writable=attr.fset is not None,
                enumerable=False,
                getter=attr.fget,
                setter=attr.fset,
            )
        return PropertyDescriptor(value=attr, enumerable=False)


class ProxyModel:
    """
    Record façade over an ordered set of backing mappings.

    Args:
        data: Single backing mapping (use ``sources=[...]`` for several)
        parent: Owning object, e.g. the collection the document came from
        **options: Any ModelOptions field

    Raises:
        ConfigurationError: If no valid source is given or an option is invalid
    """

    type_converters: ClassVar[Mapping[Hashable, Any] | None] = None
    default_converter: ClassVar[Callable[..., Any] | None] = None
    prop_aliases: ClassVar[Mapping[Hashable, Hashable] | None] = None
    readonly_props: ClassVar[Any] = None
    extra_props: ClassVar[Any] = None
    default_options: ClassVar[Mapping[str, Any] | None] = None

    def __init__(self, data: Mapping | None = None, parent: Any = None, **options: Any):
        values: dict[str, Any] = dict(self._declared("default_options") or {})
        values.update(options)
        if data is not None:
            values["data"] = data
        if parent is not None:
            values["parent"] = parent
        for attr, option in CAPABILITIES.items():
            declared = self._declared(attr)
            if declared is not None:
                values[option] = declared

        self._options: ModelOptions = load_options(values)
        self._events = EventChannel()

        opts = self._options
        self._engine = AccessEngine(
            SourceSet(opts.resolved_sources, fallback=_AttributeFallback(self)),
            aliases=AliasTable(opts.aliases),
            converters=ConversionRegistry(opts.converters, opts.default_converter),
            events=self._events,
            readonly_keys=opts.readonly_keys,
            extra_keys=opts.extra_keys,
            enumerate_non_enumerable=opts.enumerate_non_enumerable,
            enumerate_symbols=opts.enumerate_symbols,
            confirm_delete=opts.confirm_delete,
            readonly_write_succeeds=opts.readonly_write_succeeds,
            model=self,
        )

        logger.debug(
            f"Built {type(self).__name__} over {len(self._engine.sources)} source(s) "
            f"(aliases={len(self._engine.aliases)}, "
            f"converters={len(self._engine.converters)}, "
            f"readonly={len(self._engine.readonly_keys)})"
        )
        self.setup_model()

    def _declared(self, name: str) -> Any:
        """Read a capability declared on the class; properties are evaluated."""
        value = inspect.getattr_static(type(self), name, None)
        if isinstance(value, property):
            return value.fget(self)
        if isinstance(value, staticmethod):
            return value.__func__
        return value

    def setup_model(self) -> None:
        """Hook called once at the end of construction."""

    # ----------------------------------------------------------- operations

    def get(self, key: Any, default: Any = None) -> Any:
        """
        Return the converted value for ``key``, or ``default`` if absent.

        A stored ``None`` is returned as ``None``. Pass ``default=UNDEFINED``
        to tell it apart from a missing key:

            if model.get("email", UNDEFINED) is UNDEFINED:
                ...
        """
        value = self._engine.get(key)
        return value if is_defined(value) else default

    def set(self, key: Any, value: Any) -> bool:
        """
        Write ``value`` for ``key``.

        Returns:
            True if the write happened or was handled by an observer; for a
            read-only key, the configured read-only outcome.
        """
        return self._engine.set(key, value)

    def has(self, key: Any) -> bool:
        return self._engine.has(key)

    def keys(self) -> list[Any]:
        return self._engine.own_keys()

    def describe(self, key: Any) -> PropertyDescriptor | None:
        return self._engine.describe(key)

    def delete(self, key: Any) -> bool:
        return self._engine.delete(key)

    def items(self) -> list[tuple[Any, Any]]:
        return [(key, self.get(key)) for key in self.keys()]

    def to_dict(self, clean: bool = False) -> dict[Any, Any]:
        """
        Materialize the converted view of ``keys()``.

        Args:
            clean: Make the result JSON-safe (ObjectId and datetime to str)
        """
        result = {}
        for key in self.keys():
            value = self._engine.get(key)
            if value is not UNDEFINED:
                result[key] = value
        return clean_mongo_doc(result) if clean else result

    # -------------------------------------------------------------- indexer

    def __getitem__(self, key: Any) -> Any:
        value = self._engine.get(key)
        if value is UNDEFINED:
            raise KeyError(key)
        return value

    def __setitem__(self, key: Any, value: Any) -> None:
        if not self._engine.set(key, value):
            raise ReadonlyPropertyError(
                f"Cannot assign to read-only property '{key}'", key=key, value=value
            )

    def __delitem__(self, key: Any) -> None:
        if not self._engine.delete(key):
            raise KeyError(key)

    def __contains__(self, key: Any) -> bool:
        return self._engine.has(key)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._engine.own_keys())

    def __len__(self) -> int:
        return len(self._engine.own_keys())

    # -------------------------------------------------------- direct access

    def unwrap(self) -> Mapping:
        """The primary backing mapping, without any virtualization."""
        return self._engine.sources.primary

    @property
    def sources(self) -> tuple[Mapping, ...]:
        return tuple(self._engine.sources)

    @property
    def parent(self) -> Any:
        return self._options.parent

    @property
    def options(self) -> ModelOptions:
        return self._options

    @property
    def events(self) -> EventChannel:
        return self._events

    @property
    def engine(self) -> AccessEngine:
        return self._engine

    def on(self, event: str, listener: Listener) -> Callable[[], bool]:
        """Subscribe to a lifecycle event. Returns a detach callable."""
        return self._events.on(event, listener)

    def off(self, event: str, listener: Listener) -> bool:
        return self._events.off(event, listener)

    def invalidate(self, key: Any = None) -> None:
        """
        Drop cached source resolutions.

        The engine never does this on its own; call it after changing the
        backing sources behind the model's back.
        """
        cache = self._engine.sources.cache
        if key is None:
            cache.clear()
        else:
            cache.invalidate(self._engine.aliases.resolve(key))

    def __repr__(self) -> str:
        primary = self._engine.sources.primary
        return (
            f"<{type(self).__name__} keys={list(primary)!r} "
            f"sources={len(self._engine.sources)}>"
        )

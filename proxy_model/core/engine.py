"""
Access engine: the property resolution state machine.

Every operation is an independent transaction over the alias table, the
source set (with its resolution cache), the conversion registry and the
read-only set. Lifecycle events are emitted through the event channel with
a mutable AccessContext; observers may alter the outcome as documented per
operation. Nothing here raises for a missing key.
"""

from collections.abc import Hashable, Iterable
from typing import Any

from ..constants import (EVENT_DELETE, EVENT_DESCRIBE, EVENT_GET, EVENT_HAS,
                         EVENT_OWN_KEYS, EVENT_SET, EVENT_VALIDATE,
                         HIDDEN_KEY_PREFIX)
from ..events import EventChannel
from .aliases import AliasTable
from .converters import ConversionRegistry
from .sources import SourceSet, read_source
from .types import (AccessContext, PropertyDescriptor, ReadonlyViolation,
                    is_defined)


class AccessEngine:
    """
    Implements get / set / has / own_keys / describe / delete.

    Args:
        sources: Backing sources with their resolution cache
        aliases: Logical to physical key table
        converters: Field converters and catch-all transform
        events: Channel receiving lifecycle events
        readonly_keys: Keys refused by ``set`` (resolved through ``aliases``)
        extra_keys: Virtual key names appended by ``own_keys``
        enumerate_non_enumerable: Include ``__``-prefixed keys in ``own_keys``
        enumerate_symbols: Append non-string keys in ``own_keys``
        confirm_delete: Verify a deleted key is gone before reporting success
        readonly_write_succeeds: Outcome reported for a refused write
        model: Object exposed as ``AccessContext.model``
    """

    def __init__(
        self,
        sources: SourceSet,
        aliases: AliasTable | None = None,
        converters: ConversionRegistry | None = None,
        events: EventChannel | None = None,
        readonly_keys: Iterable[Hashable] = (),
        extra_keys: Iterable[Hashable] = (),
        *,
        enumerate_non_enumerable: bool = False,
        enumerate_symbols: bool = False,
        confirm_delete: bool = True,
        readonly_write_succeeds: bool = True,
        model: Any = None,
    ):
        self.sources = sources
        self.aliases = aliases if aliases is not None else AliasTable()
        self.converters = converters if converters is not None else ConversionRegistry()
        self.events = events if events is not None else EventChannel()
        self.readonly_keys = frozenset(self.aliases.resolve(key) for key in readonly_keys)
        self.extra_keys = tuple(extra_keys)
        self.enumerate_non_enumerable = enumerate_non_enumerable
        self.enumerate_symbols = enumerate_symbols
        self.confirm_delete = confirm_delete
        self.readonly_write_succeeds = readonly_write_succeeds
        self.model = model

    def _context(self, operation: str, requested: Any, **fields: Any) -> AccessContext:
        key = self.aliases.resolve(requested)
        return AccessContext(
            operation=operation, key=key, requested_key=requested, model=self.model, **fields
        )

    def is_readonly(self, key: Any) -> bool:
        return self.aliases.resolve(key) in self.readonly_keys

    def is_enumerable(self, key: Any) -> bool:
        return not (isinstance(key, str) and key.startswith(HIDDEN_KEY_PREFIX))

    # ------------------------------------------------------------------ get

    def get(self, key: Any) -> Any:
        """Resolve, convert and return the value for ``key`` (UNDEFINED if absent)."""
        context = self._context(EVENT_GET, key)
        raw, source = self.sources.resolve(context.key)
        context.raw = context.value = raw
        context.source = source

        context.value = self.converters.apply_get(context.key, raw, context)

        self.events.emit(EVENT_GET, context)
        return context.value

    # ------------------------------------------------------------------ set

    def set(self, key: Any, value: Any) -> bool:
        """
        Convert and write ``value`` to the primary source.

        A ``validate`` observer setting ``context.done`` skips the default
        write. A read-only key is never written; the configured outcome is
        returned and ``context.error`` describes the refusal.
        """
        context = self._context(EVENT_SET, key, raw=value)
        context.value = self.converters.apply_set(context.key, value)
        context.source = self.sources.primary
        result = True

        self.events.emit(EVENT_VALIDATE, context)
        if not context.done:
            if context.key in self.readonly_keys:
                context.error = ReadonlyViolation(
                    key=context.key, value=context.value, sources=tuple(self.sources)
                )
                result = self.readonly_write_succeeds
            else:
                self.sources.write(context.key, context.value)
                context.done = True
        self.events.emit(EVENT_SET, context)

        return result

    # ------------------------------------------------------------------ has

    def has(self, key: Any) -> bool:
        context = self._context(EVENT_HAS, key)
        context.value = self.sources.contains(context.key)
        self.events.emit(EVENT_HAS, context)
        return bool(context.value)

    # ------------------------------------------------------------- own_keys

    def own_keys(self) -> list[Any]:
        """
        Primary source keys in source order, then the extra keys.

        Duplicates are dropped keeping the first occurrence.
        """
        named: list[Any] = []
        others: list[Any] = []
        for key in self.sources.primary:
            if isinstance(key, str):
                if self.enumerate_non_enumerable or self.is_enumerable(key):
                    named.append(key)
            elif self.enumerate_symbols:
                others.append(key)

        context = AccessContext(
            operation=EVENT_OWN_KEYS,
            source=self.sources.primary,
            keys=named + others + list(self.extra_keys),
            model=self.model,
        )
        self.events.emit(EVENT_OWN_KEYS, context)
        return list(dict.fromkeys(context.keys or ()))

    # ------------------------------------------------------------- describe

    def describe(self, key: Any) -> PropertyDescriptor | None:
        """Descriptor from the primary source, else from the fallback."""
        context = self._context(EVENT_DESCRIBE, key)
        primary = self.sources.primary
        raw = read_source(primary, context.key)
        if is_defined(raw):
            context.source = primary
            context.raw = raw
            context.value = PropertyDescriptor(
                value=raw,
                writable=context.key not in self.readonly_keys,
                enumerable=self.is_enumerable(context.key),
            )
        elif self.sources.fallback is not None:
            context.source = self.sources.fallback
            context.value = self.sources.fallback.describe(context.key)
        else:
            context.value = None

        self.events.emit(EVENT_DESCRIBE, context)
        return context.value

    # --------------------------------------------------------------- delete

    def delete(self, key: Any) -> bool:
        """
        Remove ``key`` from the primary source.

        A ``deleteProperty`` observer may assign a bool to ``context.value``
        to decide the outcome without touching the source.
        """
        context = self._context(EVENT_DELETE, key, source=self.sources.primary)
        self.events.emit(EVENT_DELETE, context)

        if isinstance(context.value, bool):
            return context.value

        self.sources.delete(context.key)
        if self.confirm_delete:
            context.value = not is_defined(read_source(self.sources.primary, context.key))
        else:
            context.value = True
        return context.value

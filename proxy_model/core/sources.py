"""
Ordered backing sources and the key -> source resolution cache.

Reads scan the sources in registration order and memoize which one answered.
Writes and deletes go to the primary (first) source and leave the cache
alone, so a cached entry can point at a source that is no longer the first
to hold a key. Callers that need fresh resolution call ``invalidate()``.
"""

from collections.abc import Hashable, Iterable, Iterator, Mapping
from typing import Any, Protocol

from .types import UNDEFINED, PropertyDescriptor, is_defined


class Fallback(Protocol):
    """Base-object behaviour consulted when no source holds a key."""

    def lookup(self, key: Any) -> Any:
        """Return the value for ``key`` or UNDEFINED."""

    def contains(self, key: Any) -> bool:
        """Return True if ``key`` is declared."""

    def describe(self, key: Any) -> PropertyDescriptor | None:
        """Return a descriptor for ``key`` or None."""


def read_source(source: Mapping, key: Any) -> Any:
    """Single lookup against one source; UNDEFINED when absent."""
    return source.get(key, UNDEFINED)


class ResolutionCache:
    """Memoized ``key -> source`` map. Grows until explicitly invalidated."""

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[Hashable, Any] = {}

    def get(self, key: Any) -> Any | None:
        return self._entries.get(key)

    def store(self, key: Any, source: Any) -> None:
        self._entries[key] = source

    def invalidate(self, key: Any) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: Any) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class SourceSet:
    """
    Ordered, non-copied collection of backing mappings.

    The first source is the primary one: it is the write target and the
    source of enumerated keys and descriptors.
    """

    __slots__ = ("_sources", "_fallback", "cache")

    def __init__(
        self,
        sources: Iterable[Mapping],
        fallback: Fallback | None = None,
        cache: ResolutionCache | None = None,
    ):
        self._sources: tuple[Mapping, ...] = tuple(sources)
        if not self._sources:
            raise ValueError("SourceSet requires at least one source")
        self._fallback = fallback
        self.cache = cache if cache is not None else ResolutionCache()

    @property
    def primary(self) -> Mapping:
        return self._sources[0]

    @property
    def fallback(self) -> Fallback | None:
        return self._fallback

    def resolve(self, key: Any) -> tuple[Any, Any]:
        """
        Find the value for ``key``.

        Returns:
            ``(value, source)``; ``(UNDEFINED, None)`` when nothing holds it.
            ``source`` is the fallback object when a computed attribute
            answered.
        """
        cached = self.cache.get(key)
        if cached is not None:
            if cached is self._fallback:
                return self._fallback.lookup(key), cached
            return read_source(cached, key), cached

        for source in self._sources:
            value = read_source(source, key)
            if is_defined(value):
                self.cache.store(key, source)
                return value, source

        if self._fallback is not None:
            value = self._fallback.lookup(key)
            if is_defined(value):
                self.cache.store(key, self._fallback)
                return value, self._fallback

        return UNDEFINED, None

    def contains(self, key: Any) -> bool:
        """True if any source defines ``key`` or the fallback declares it."""
        for source in self._sources:
            if is_defined(read_source(source, key)):
                return True
        return self._fallback is not None and self._fallback.contains(key)

    def write(self, key: Any, raw: Any) -> None:
        self.primary[key] = raw

    def delete(self, key: Any) -> None:
        self.primary.pop(key, None)

    def __iter__(self) -> Iterator[Mapping]:
        return iter(self._sources)

    def __len__(self) -> int:
        return len(self._sources)

    def __getitem__(self, index: int) -> Mapping:
        return self._sources[index]

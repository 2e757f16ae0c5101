"""
Logical to physical key mapping.
"""

from collections.abc import Hashable, Mapping
from typing import Any


class AliasTable:
    """
    Maps public field names to storage field names.

    Resolution is a single hop: the target of an alias is never resolved
    again, so ``{"id": "_id", "_id": "oid"}`` maps ``id`` to ``_id``.
    """

    __slots__ = ("_aliases",)

    def __init__(self, aliases: Mapping[Hashable, Hashable] | None = None):
        self._aliases: dict[Hashable, Hashable] = dict(aliases or {})

    def resolve(self, key: Any) -> Any:
        """Return the physical key for ``key`` (``key`` itself if not aliased)."""
        try:
            return self._aliases.get(key, key)
        except TypeError:
            # Unhashable keys can't be aliased.
            return key

    def is_alias(self, key: Any) -> bool:
        try:
            return key in self._aliases
        except TypeError:
            return False

    def __len__(self) -> int:
        return len(self._aliases)

    def __repr__(self) -> str:
        return f"AliasTable({self._aliases!r})"

"""
Conversion registry: per-field value transforms applied at the API boundary.
"""

from collections.abc import Callable, Hashable, Mapping
from typing import Any

from .types import AccessContext, Converter, is_defined


class ConversionRegistry:
    """
    Field name to Converter map, plus an optional catch-all transform.

    Converters are keyed by the already alias-resolved key. The catch-all
    ``default(context)`` only runs for keys without a field converter. Both
    are called even when no source had a value, so they can synthesize one.
    """

    __slots__ = ("_converters", "_default")

    def __init__(
        self,
        converters: Mapping[Hashable, Any] | None = None,
        default: Callable[[AccessContext], Any] | None = None,
    ):
        if default is not None and not callable(default):
            raise TypeError(f"Default converter must be callable, got {type(default)}")
        self._converters: dict[Hashable, Converter] = {
            key: Converter.from_spec(spec) for key, spec in (converters or {}).items()
        }
        self._default = default

    def has_converter(self, key: Any) -> bool:
        try:
            return key in self._converters
        except TypeError:
            return False

    def converter_for(self, key: Any) -> Converter | None:
        try:
            return self._converters.get(key)
        except TypeError:
            return None

    def apply_get(self, key: Any, raw: Any, context: AccessContext) -> Any:
        """
        Convert a stored value into its API value.

        A field converter's ``get(raw, context)`` runs even when ``raw`` is
        UNDEFINED, so it can supply a value for a missing field. Without
        ``get``, its ``all(context)`` runs instead. Keys with no field
        converter go to the catch-all. A converter returning UNDEFINED
        leaves ``raw`` as is.
        """
        converter = self.converter_for(key)
        if converter is not None:
            if converter.get is not None:
                value = converter.get(raw, context)
            elif converter.all is not None:
                value = converter.all(context)
            else:
                return raw
        elif self._default is not None:
            value = self._default(context)
        else:
            return raw
        return value if is_defined(value) else raw

    def apply_set(self, key: Any, value: Any) -> Any:
        """Convert an API value into the value that gets stored."""
        converter = self.converter_for(key)
        if converter is None or converter.set is None:
            return value
        return converter.set(value)

    def __len__(self) -> int:
        return len(self._converters)

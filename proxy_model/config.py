"""
Configuration for proxy models.

Options are validated once, at model construction, with Pydantic. They are
fixed for the lifetime of the model.
"""

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .constants import (DEFAULT_CONFIRM_DELETE, DEFAULT_ENUMERATE_NON_ENUMERABLE,
                        DEFAULT_ENUMERATE_SYMBOLS, DEFAULT_READONLY_FAIL)
from .exceptions import ConfigurationError


class ModelOptions(BaseModel):
    """
    Validated proxy model options.

    Sources are kept by reference: the list is new, the mappings in it are
    the caller's own objects.

    Example:
        options = ModelOptions(
            sources=[doc, defaults],
            aliases={"id": "_id"},
            readonly_keys={"level"},
        )
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid", frozen=True)

    sources: list[Any] | None = Field(None, description="Ordered backing mappings")
    data: Any = Field(None, description="Single backing mapping")
    parent: Any = Field(None, description="Owning object, if any")

    aliases: dict[Any, Any] = Field(default_factory=dict, description="Logical -> physical keys")
    readonly_keys: tuple[Any, ...] = Field((), description="Keys refused by set")
    extra_keys: tuple[Any, ...] = Field((), description="Virtual keys listed by keys()")
    converters: dict[Any, Any] = Field(default_factory=dict, description="Field converters")
    default_converter: Callable[..., Any] | None = Field(
        None, description="Catch-all get transform"
    )

    enumerate_non_enumerable: bool = DEFAULT_ENUMERATE_NON_ENUMERABLE
    enumerate_symbols: bool = DEFAULT_ENUMERATE_SYMBOLS
    confirm_delete: bool = DEFAULT_CONFIRM_DELETE
    readonly_fail: bool = DEFAULT_READONLY_FAIL
    readonly_return: bool | None = None

    @field_validator("sources")
    @classmethod
    def _check_sources(cls, value: list[Any] | None) -> list[Any] | None:
        if value is None:
            return value
        if not value:
            raise ValueError("sources must not be empty")
        for index, source in enumerate(value):
            if not isinstance(source, Mapping):
                raise ValueError(f"source #{index} is not a mapping: {type(source).__name__}")
        return value

    @field_validator("data")
    @classmethod
    def _check_data(cls, value: Any) -> Any:
        if value is not None and not isinstance(value, Mapping):
            raise ValueError(f"data is not a mapping: {type(value).__name__}")
        return value

    @model_validator(mode="after")
    def _require_source(self) -> "ModelOptions":
        if self.sources is None and self.data is None:
            raise ValueError("No valid 'data' or 'sources' option specified")
        return self

    @property
    def resolved_sources(self) -> list[Mapping]:
        """``sources`` when given, else ``[data]``."""
        return list(self.sources) if self.sources is not None else [self.data]

    @property
    def readonly_write_succeeds(self) -> bool:
        """
        Outcome reported when a read-only key is written.

        ``readonly_return`` when set, else the inverse of ``readonly_fail``.
        """
        if self.readonly_return is not None:
            return self.readonly_return
        return not self.readonly_fail


def load_options(values: Mapping[str, Any]) -> ModelOptions:
    """
    Validate raw option values.

    Raises:
        ConfigurationError: If the options are invalid or no source is given
    """
    try:
        return ModelOptions(**values)
    except ValidationError as e:
        first = e.errors()[0] if e.errors() else {}
        loc = first.get("loc") or ()
        config_key = str(loc[0]) if loc else None
        raise ConfigurationError(
            f"Invalid model options: {first.get('msg', str(e))}",
            config_key=config_key,
            context={"error_count": e.error_count()},
        ) from e

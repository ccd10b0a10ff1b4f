"""Cache configuration settings and option layering."""

from collections.abc import Mapping
from pathlib import Path
from typing import Any
from typing import Union

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from fs_cachex.exceptions import InvalidOptionError
from fs_cachex.hashing import DEFAULT_ALGORITHM

_DEFAULT_CACHE_DIRECTORY = Path.cwd() / ".cache"


class CacheOptions(BaseModel):
    """Cache configuration settings."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    enabled: bool = Field(
        default=True,
        description="Whether caching is on; when off every operation is a no-op",
    )
    cache_algorithm: str = Field(
        default=DEFAULT_ALGORITHM,
        alias="cacheAlgorithm",
        description="hashlib algorithm used for key directories and etags",
    )
    cache_directory: Path = Field(
        default=_DEFAULT_CACHE_DIRECTORY,
        alias="cacheDirectory",
        description="Root directory holding one subdirectory per cache key",
    )


OptionsLayer = Union[CacheOptions, Mapping[str, Any], None]

DEFAULT_OPTIONS = CacheOptions()

_FIELD_NAMES: dict[str, str] = {}
for _name, _field in CacheOptions.model_fields.items():
    _FIELD_NAMES[_name] = _name
    if _field.alias:
        _FIELD_NAMES[_field.alias] = _name


def default_options() -> CacheOptions:
    """Return the built-in default options."""
    return DEFAULT_OPTIONS


def options_layer(layer: OptionsLayer) -> dict[str, Any]:
    """Return the fields a layer overrides, keyed by field name."""
    if layer is None:
        return {}
    if isinstance(layer, CacheOptions):
        return layer.model_dump(exclude_unset=True)

    update: dict[str, Any] = {}
    for name, value in layer.items():
        if name not in _FIELD_NAMES:
            msg = f"Unknown cache option: {name!r}"
            raise InvalidOptionError(msg)
        update[_FIELD_NAMES[name]] = value
    return update


def resolve_options(*layers: OptionsLayer) -> CacheOptions:
    """Merge option layers over the defaults.

    Later layers win over earlier ones. A :class:`CacheOptions` layer only
    contributes the fields that were explicitly set on it. Values are copied
    as given; a bad value surfaces when a cache operation uses it.
    """
    update: dict[str, Any] = {}
    for layer in layers:
        update.update(options_layer(layer))

    if not update:
        return DEFAULT_OPTIONS
    return DEFAULT_OPTIONS.model_copy(update=update)

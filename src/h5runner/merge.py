# src/h5runner/merge.py
"""Deep, precedence-ordered merging of option layers."""

from collections.abc import Mapping
from typing import Any

from .errors import InvalidLayer


def _copy_value(value: Any) -> Any:
    """Copy containers so the merged result never aliases an input layer."""
    if isinstance(value, Mapping):
        return _merge_into({}, value)
    if isinstance(value, list):
        return [_copy_value(v) for v in value]
    return value


def _merge_into(target: dict[str, Any], layer: Mapping[str, Any]) -> dict[str, Any]:
    for key, value in layer.items():
        existing = target.get(key)
        if isinstance(existing, dict) and isinstance(value, Mapping):
            _merge_into(existing, value)
        else:
            # Lists and scalars are replaced wholesale: last layer wins.
            target[key] = _copy_value(value)
    return target


def recursive_merge(*layers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge option layers left to right into a new mapping.

    For each key, nested mappings are merged recursively; any other value
    (including lists) is taken from the last layer that defines it.

    A `None` layer is treated as absent and skipped. Any other non-mapping
    layer raises `InvalidLayer`. Input layers are never mutated.

    Example:
        >>> recursive_merge({"a": {"x": 1, "y": 2}}, {"a": {"y": 3, "z": 4}})
        {'a': {'x': 1, 'y': 3, 'z': 4}}
    """
    merged: dict[str, Any] = {}
    for position, layer in enumerate(layers):
        if layer is None:
            continue
        if not isinstance(layer, Mapping):
            raise InvalidLayer(layer, position)
        _merge_into(merged, layer)
    return merged


def merge_option(layers: list[Mapping[str, Any] | None]) -> dict[str, Any]:
    """List form of `recursive_merge()`, used by the loader factories."""
    return recursive_merge(*layers)


def as_layer(value: Any) -> Mapping[str, Any] | None:
    """Return `value` if it can be merged, else None (treated as absent).

    Used for nested user options, where a malformed value falls back to
    the defaults instead of failing assembly.
    """
    return value if isinstance(value, Mapping) else None


def merge_user_option(default: Mapping[str, Any], option: Any) -> dict[str, Any]:
    """Merge a ``{"enable", "config"}`` style user option over `default`.

    A non-mapping option, or a non-mapping ``config`` inside it, is
    ignored so the defaults apply.
    """
    layer = as_layer(option)
    if layer is not None and as_layer(layer.get("config", {})) is None:
        layer = {k: v for k, v in layer.items() if k != "config"}
    return recursive_merge(default, layer)

# src/h5runner/postcss.py
"""PostCSS plugin list for the style post-processing rule."""

from collections.abc import Mapping
from typing import Any

from .constants import (
    DEFAULT_AUTOPREFIXER_OPTION,
    DEFAULT_CONSTPARSE_OPTION,
    DEFAULT_PXTRANSFORM_OPTION,
    POSTCSS_BUILTIN_KEYS,
)
from .logs import getAppLogger
from .merge import as_layer, merge_user_option, recursive_merge


def _plugin(name: str, options: Mapping[str, Any]) -> dict[str, Any]:
    return {"plugin": name, "options": dict(options)}


def get_postcss_plugins(
    *,
    design_width: int,
    device_ratio: Mapping[str, Any],
    postcss_option: Mapping[str, Any] | None,
) -> list[dict[str, Any]]:
    """Return the ordered postcss plugin list.

    Order is fixed: constant parsing, autoprefixer, pxtransform, then any
    extra plugin entries from `postcss_option` that set ``enable: True``.
    """
    logger = getAppLogger()
    postcss_option = as_layer(postcss_option) or {}

    autoprefixer_option = merge_user_option(
        DEFAULT_AUTOPREFIXER_OPTION, postcss_option.get("autoprefixer")
    )
    pxtransform_option = merge_user_option(
        DEFAULT_PXTRANSFORM_OPTION, postcss_option.get("pxtransform")
    )

    plugins = [_plugin("postcss-plugin-constparse", DEFAULT_CONSTPARSE_OPTION)]

    if autoprefixer_option.get("enable"):
        plugins.append(_plugin("autoprefixer", autoprefixer_option["config"]))

    if pxtransform_option.get("enable"):
        plugins.append(
            _plugin(
                "postcss-pxtransform",
                recursive_merge(
                    {"designWidth": design_width, "deviceRatio": device_ratio},
                    pxtransform_option["config"],
                ),
            )
        )

    for name, option in postcss_option.items():
        if name in POSTCSS_BUILTIN_KEYS:
            continue
        if not isinstance(option, Mapping) or not option.get("enable"):
            logger.trace(f"[postcss] skipping disabled plugin {name!r}")
            continue
        plugins.append(_plugin(name, as_layer(option.get("config")) or {}))

    return plugins

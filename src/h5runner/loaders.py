# src/h5runner/loaders.py
"""Factories for loader steps and plugin specs.

Every factory takes an ordered list of option layers (defaults first,
caller overrides last) and merges them with `merge_option()`.
"""

from collections.abc import Mapping
from typing import Any

from .chain import Loader, PluginSpec
from .constants import (
    BABEL_LOADER,
    CSS_LOADER,
    CSSO_PLUGIN,
    DEFAULT_CSS_COMPRESS_OPTION,
    DEFAULT_UGLIFY_OPTION,
    DEFINE_PLUGIN,
    EXTRACT_CSS_LOADER,
    HMR_PLUGIN,
    HTML_PLUGIN,
    LESS_LOADER,
    MINI_CSS_EXTRACT_PLUGIN,
    POSTCSS_LOADER,
    RESOLVE_URL_LOADER,
    SASS_LOADER,
    STYLE_LOADER,
    STYLUS_LOADER,
    UGLIFY_PLUGIN,
    URL_LOADER,
)
from .merge import merge_option, recursive_merge


Layers = list[Mapping[str, Any] | None]


def get_loader(loader_name: str, options: Mapping[str, Any] | None) -> Loader:
    return Loader(loader_name, dict(options or {}))


def get_style_loader(layers: Layers) -> Loader:
    return get_loader(STYLE_LOADER, merge_option(layers))


def get_css_loader(layers: Layers) -> Loader:
    return get_loader(CSS_LOADER, merge_option(layers))


def get_postcss_loader(layers: Layers) -> Loader:
    return get_loader(POSTCSS_LOADER, merge_option(layers))


def get_resolve_url_loader(layers: Layers) -> Loader:
    return get_loader(RESOLVE_URL_LOADER, merge_option(layers))


def get_sass_loader(layers: Layers) -> Loader:
    return get_loader(SASS_LOADER, merge_option(layers))


def get_less_loader(layers: Layers) -> Loader:
    return get_loader(LESS_LOADER, merge_option(layers))


def get_stylus_loader(layers: Layers) -> Loader:
    return get_loader(STYLUS_LOADER, merge_option(layers))


def get_babel_loader(layers: Layers) -> Loader:
    return get_loader(BABEL_LOADER, merge_option(layers))


def get_url_loader(layers: Layers) -> Loader:
    return get_loader(URL_LOADER, merge_option(layers))


def get_extract_css_loader() -> Loader:
    return Loader(EXTRACT_CSS_LOADER)


# --- plugins ---


def get_plugin(plugin: str, args: list[Any]) -> PluginSpec:
    return PluginSpec(plugin, args)


def get_mini_css_extract_plugin(layers: Layers) -> PluginSpec:
    return get_plugin(MINI_CSS_EXTRACT_PLUGIN, [merge_option(layers)])


def get_html_webpack_plugin(layers: Layers) -> PluginSpec:
    return get_plugin(HTML_PLUGIN, [merge_option(layers)])


def get_define_plugin(layers: Layers) -> PluginSpec:
    return get_plugin(DEFINE_PLUGIN, [merge_option(layers)])


def get_hot_module_replacement_plugin() -> PluginSpec:
    return get_plugin(HMR_PLUGIN, [])


def get_uglify_plugin(
    enable_source_map: bool, uglify_options: Mapping[str, Any] | None
) -> PluginSpec:
    return get_plugin(
        UGLIFY_PLUGIN,
        [
            {
                "cache": True,
                "parallel": True,
                "sourceMap": enable_source_map,
                "uglifyOptions": recursive_merge(DEFAULT_UGLIFY_OPTION, uglify_options),
            }
        ],
    )


def get_csso_plugin(csso_options: Mapping[str, Any] | None) -> PluginSpec:
    return get_plugin(
        CSSO_PLUGIN, [merge_option([DEFAULT_CSS_COMPRESS_OPTION, csso_options])]
    )


def process_env_option(env: Mapping[str, Any] | None) -> dict[str, Any]:
    """Prefix env keys so they are substituted as `process.env.KEY`."""
    return {f"process.env.{key}": value for key, value in (env or {}).items()}

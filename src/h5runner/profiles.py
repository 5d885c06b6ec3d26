# src/h5runner/profiles.py
"""Development and production build profiles.

Each profile starts from `base_conf()`, layers its own defaults under the
caller's options and assembles a fresh `Chain`. Nothing is shared between
calls, so a profile can be assembled any number of times.
"""

import os
from collections.abc import Mapping
from typing import Any, Literal

from .chain import Chain
from .classify import ModuleClassifier
from .config.config_types import BuildConfig, BuildOptionsResolved
from .constants import (
    DEFAULT_BUILD_OPTIONS,
    DEFAULT_MINI_CSS_EXTRACT_OPTION,
    DEFAULT_RESOLVE_ALIAS,
    DEFAULT_RESOLVE_EXTENSIONS,
    DEFAULT_RESOLVE_MAIN_FIELDS,
    DEV_ENABLE_EXTRACT,
    DEV_ENABLE_SOURCE_MAP,
    PROD_ENABLE_EXTRACT,
    PROD_ENABLE_SOURCE_MAP,
)
from .loaders import (
    get_csso_plugin,
    get_define_plugin,
    get_hot_module_replacement_plugin,
    get_html_webpack_plugin,
    get_mini_css_extract_plugin,
    get_uglify_plugin,
    process_env_option,
)
from .logs import getAppLogger
from .merge import as_layer, recursive_merge
from .rules import get_devtool, get_entry, get_module, get_output


def build_conf(config: Mapping[str, Any]) -> BuildOptionsResolved:
    """Apply layout defaults to a caller config."""
    merged = recursive_merge(
        DEFAULT_BUILD_OPTIONS,
        {key: config[key] for key in DEFAULT_BUILD_OPTIONS if key in config},
    )
    merged["app_path"] = str(config.get("app_path") or os.getcwd())
    return BuildOptionsResolved(**merged)  # type: ignore[typeddict-item]


def base_conf() -> Chain:
    """Return the chain shared by both profiles."""
    return Chain(
        resolve={
            "extensions": list(DEFAULT_RESOLVE_EXTENSIONS),
            "mainFields": list(DEFAULT_RESOLVE_MAIN_FIELDS),
            "symlinks": True,
            "modules": ["node_modules"],
            "alias": dict(DEFAULT_RESOLVE_ALIAS),
        },
    )


def _is_enabled(plugins: Mapping[str, Any], name: str) -> bool:
    option = plugins.get(name)
    return not (isinstance(option, Mapping) and option.get("enable") is False)


def _plugin_config(plugins: Mapping[str, Any], name: str) -> Mapping[str, Any] | None:
    option = plugins.get(name)
    if isinstance(option, Mapping):
        return as_layer(option.get("config"))
    return None


def _assemble(
    config: BuildConfig,
    *,
    mode: Literal["development", "production"],
    enable_source_map: bool,
    enable_extract: bool,
) -> Chain:
    logger = getAppLogger()
    opts = build_conf(config)
    logger.debug(
        f"[profiles] assembling {mode} chain "
        f"(source_map={enable_source_map}, extract={enable_extract})"
    )

    chain = base_conf()
    chain.mode = mode
    chain.devtool = get_devtool(enable_source_map)
    chain.entry = get_entry(config.get("entry"))
    chain.output = get_output(
        app_path=opts["app_path"],
        output_root=opts["output_root"],
        public_path=opts["public_path"],
        chunk_directory=opts["chunk_directory"],
        custom_output=config.get("output"),
    )
    chain.resolve["alias"] = recursive_merge(
        chain.resolve["alias"], config.get("alias")
    )

    get_module(
        chain,
        classifier=ModuleClassifier.from_esnext_modules(config.get("esnext_modules")),
        static_directory=opts["static_directory"],
        design_width=opts["design_width"],
        device_ratio=opts["device_ratio"],
        enable_extract=enable_extract,
        enable_source_map=enable_source_map,
        style_loader_option=config.get("style_loader_option"),
        css_loader_option=config.get("css_loader_option"),
        sass_loader_option=config.get("sass_loader_option"),
        less_loader_option=config.get("less_loader_option"),
        stylus_loader_option=config.get("stylus_loader_option"),
        font_url_loader_option=config.get("font_url_loader_option"),
        image_url_loader_option=config.get("image_url_loader_option"),
        media_url_loader_option=config.get("media_url_loader_option"),
        module=config.get("module"),
        plugins=config.get("plugins"),
    )

    chain.plugins["htmlWebpackPlugin"] = get_html_webpack_plugin(
        [
            {
                "filename": "index.html",
                "template": os.path.join(
                    opts["app_path"], opts["source_root"], "index.html"
                ),
            }
        ]
    )
    chain.plugins["definePlugin"] = get_define_plugin(
        [process_env_option(config.get("env")), config.get("define_constants")]
    )
    if enable_extract:
        chain.plugins["miniCssExtractPlugin"] = get_mini_css_extract_plugin(
            [
                DEFAULT_MINI_CSS_EXTRACT_OPTION,
                config.get("mini_css_extract_plugin_option"),
            ]
        )
    return chain


def dev_conf(config: BuildConfig) -> Chain:
    """Development profile: no extraction or minification, hot reload on."""
    chain = _assemble(
        config,
        mode="development",
        enable_source_map=config.get("enable_source_map", DEV_ENABLE_SOURCE_MAP),
        enable_extract=config.get("enable_extract", DEV_ENABLE_EXTRACT),
    )
    chain.plugins["hotModuleReplacementPlugin"] = get_hot_module_replacement_plugin()
    chain.minimize = False
    return chain


def prod_conf(config: BuildConfig) -> Chain:
    """Production profile: styles extracted, scripts and styles minified."""
    logger = getAppLogger()
    enable_source_map = config.get("enable_source_map", PROD_ENABLE_SOURCE_MAP)
    chain = _assemble(
        config,
        mode="production",
        enable_source_map=enable_source_map,
        enable_extract=config.get("enable_extract", PROD_ENABLE_EXTRACT),
    )
    plugins = as_layer(config.get("plugins")) or {}

    chain.minimize = True
    if _is_enabled(plugins, "uglify"):
        chain.minimizers["uglifyJsPlugin"] = get_uglify_plugin(
            enable_source_map, _plugin_config(plugins, "uglify")
        )
    else:
        logger.debug("[profiles] uglify disabled by config")
    if _is_enabled(plugins, "csso"):
        chain.plugins["cssoWebpackPlugin"] = get_csso_plugin(
            _plugin_config(plugins, "csso")
        )
    else:
        logger.debug("[profiles] csso disabled by config")
    return chain

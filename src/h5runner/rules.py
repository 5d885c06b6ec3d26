# src/h5runner/rules.py
"""Assembly of the processing rules for styles, scripts and assets.

Stylesheets go through, in order:

1. ``sass`` / ``less`` / ``styl`` (pre): url resolution + dialect compiler
2. ``css``: one of scoped (css modules) or plain css loading
3. ``postcss``: prefixing / unit transforms, skipped for framework and
   opaque dependency styles
4. ``taroStyle`` (post): framework styles, injected at the top
5. ``customStyle`` (post): every other style, extracted or injected

Scripts go through ``jsx`` unless they are opaque dependencies. Media,
fonts and images are inlined below a size limit.
"""

import os
import re
from collections.abc import Mapping
from typing import Any

from .chain import Chain, Loader, OneOf, Rule, RuleVariant
from .classify import ClassPredicate, ModuleClassifier
from .constants import (
    CSS_GLOBAL_FILE,
    CSS_MODULE_FILE,
    DEFAULT_BABEL_LOADER_OPTION,
    DEFAULT_CSS_MODULE_OPTION,
    DEFAULT_ENTRY_FILE,
    DEFAULT_ENTRY_NAME,
    DEFAULT_FONT_URL_LOADER_OPTION,
    DEFAULT_IMAGE_URL_LOADER_OPTION,
    DEFAULT_MEDIA_URL_LOADER_OPTION,
    DEFAULT_TEMP_DIRECTORY,
    FONT_TEST,
    IMAGE_TEST,
    LESS_TEST,
    MEDIA_TEST,
    NO_DEVTOOL,
    OPAQUE_DEPENDENCY_ROOT,
    SASS_TEST,
    SCRIPT_TEST,
    SOURCE_MAP_DEVTOOL,
    STYLE_TEST,
    STYLUS_TEST,
)
from .loaders import (
    get_babel_loader,
    get_css_loader,
    get_extract_css_loader,
    get_less_loader,
    get_postcss_loader,
    get_resolve_url_loader,
    get_sass_loader,
    get_style_loader,
    get_stylus_loader,
    get_url_loader,
)
from .logs import getAppLogger
from .merge import as_layer, merge_user_option, recursive_merge
from .postcss import get_postcss_plugins


def get_css_module_option(postcss_option: Mapping[str, Any] | None) -> dict[str, Any]:
    return merge_user_option(
        DEFAULT_CSS_MODULE_OPTION, (postcss_option or {}).get("css_modules")
    )


def _css_one_of(
    *,
    css_module_option: Mapping[str, Any],
    enable_source_map: bool,
    css_loader_option: Mapping[str, Any] | None,
) -> OneOf:
    logger = getAppLogger()
    plain = RuleVariant(
        "normalCss",
        use=[
            get_css_loader(
                [
                    {
                        "importLoaders": 1,
                        "sourceMap": enable_source_map,
                        "modules": False,
                    },
                    css_loader_option,
                ]
            )
        ],
    )
    one_of = OneOf(default=plain)
    if not css_module_option.get("enable"):
        return one_of

    config = css_module_option["config"]
    naming_pattern = config.get("naming_pattern")
    # Anything but "module" behaves like the "global" convention.
    module_named = naming_pattern == "module"
    logger.trace(
        f"[rules] css modules enabled (naming_pattern={naming_pattern!r}, "
        f"module_named={module_named})"
    )

    scoped_loader = get_css_loader(
        [
            {
                "importLoaders": 1,
                "sourceMap": enable_source_map,
                "modules": True if module_named else "global",
                "localIdentName": config.get("generate_scoped_name"),
            },
            css_loader_option,
        ]
    )
    dependency_root = re.compile(OPAQUE_DEPENDENCY_ROOT)
    if module_named:
        scoped = RuleVariant(
            "cssModule",
            use=[scoped_loader],
            include=[re.compile(CSS_MODULE_FILE)],
            exclude=[dependency_root],
        )
    else:
        scoped = RuleVariant(
            "cssModule",
            use=[scoped_loader],
            exclude=[re.compile(CSS_GLOBAL_FILE), dependency_root],
        )
    one_of.variants.append(scoped)
    return one_of


def get_module(  # noqa: PLR0913
    chain: Chain,
    *,
    classifier: ModuleClassifier,
    static_directory: str,
    design_width: int,
    device_ratio: Mapping[str, Any],
    enable_extract: bool,
    enable_source_map: bool,
    style_loader_option: Mapping[str, Any] | None = None,
    css_loader_option: Mapping[str, Any] | None = None,
    sass_loader_option: Mapping[str, Any] | None = None,
    less_loader_option: Mapping[str, Any] | None = None,
    stylus_loader_option: Mapping[str, Any] | None = None,
    font_url_loader_option: Mapping[str, Any] | None = None,
    image_url_loader_option: Mapping[str, Any] | None = None,
    media_url_loader_option: Mapping[str, Any] | None = None,
    module: Mapping[str, Any] | None = None,
    plugins: Mapping[str, Any] | None = None,
) -> Chain:
    """Add the style, script and asset rules to `chain`, in order.

    Rules that already exist under the same name are updated in place,
    so they keep their declared position.
    """
    logger = getAppLogger()
    postcss_option = as_layer((as_layer(module) or {}).get("postcss")) or {}

    default_style_loader_option = {"sourceMap": enable_source_map, "singleton": True}
    style_loader = get_style_loader([default_style_loader_option, style_loader_option])
    top_style_loader = get_style_loader(
        [default_style_loader_option, {"insertAt": "top"}, style_loader_option]
    )
    last_style_loader = get_extract_css_loader() if enable_extract else style_loader
    logger.trace(f"[rules] application styles use {last_style_loader.loader}")

    css_module_option = get_css_module_option(postcss_option)

    postcss_loader = get_postcss_loader(
        [
            {"sourceMap": enable_source_map},
            {
                "ident": "postcss",
                "plugins": get_postcss_plugins(
                    design_width=design_width,
                    device_ratio=device_ratio,
                    postcss_option=postcss_option,
                ),
            },
        ]
    )
    resolve_url_loader = get_resolve_url_loader([])
    sass_loader = get_sass_loader([{"sourceMap": True}, sass_loader_option])
    less_loader = get_less_loader(
        [{"sourceMap": enable_source_map}, less_loader_option]
    )
    stylus_loader = get_stylus_loader(
        [{"sourceMap": enable_source_map}, stylus_loader_option]
    )

    first_party = ClassPredicate(classifier, frozenset({"first_party"}))
    skip_postcss = ClassPredicate(classifier, frozenset({"first_party", "opaque"}))
    skip_script = ClassPredicate(classifier, frozenset({"opaque"}))

    style_test = re.compile(STYLE_TEST)

    for name, test, dialect_loader in (
        ("sass", SASS_TEST, sass_loader),
        ("less", LESS_TEST, less_loader),
        ("styl", STYLUS_TEST, stylus_loader),
    ):
        _set_rule(
            chain,
            name,
            test=re.compile(test),
            enforce="pre",
            use=[resolve_url_loader, dialect_loader],
        )
    css = _set_rule(chain, "css", test=style_test)
    css.one_of = _css_one_of(
        css_module_option=css_module_option,
        enable_source_map=enable_source_map,
        css_loader_option=css_loader_option,
    )
    postcss = _set_rule(chain, "postcss", test=style_test, use=[postcss_loader])
    postcss.exclude = [skip_postcss]
    taro_style = _set_rule(
        chain, "taroStyle", test=style_test, enforce="post", use=[top_style_loader]
    )
    taro_style.include = [first_party]
    custom_style = _set_rule(
        chain, "customStyle", test=style_test, enforce="post", use=[last_style_loader]
    )
    custom_style.exclude = [first_party]

    babel_option = recursive_merge(
        DEFAULT_BABEL_LOADER_OPTION,
        as_layer((as_layer(plugins) or {}).get("babel")),
        {"sourceMap": enable_source_map},
    )
    jsx = _set_rule(
        chain,
        "jsx",
        test=re.compile(SCRIPT_TEST),
        use=[get_babel_loader([babel_option])],
    )
    jsx.exclude = [skip_script]

    asset_rules = (
        ("media", "media", MEDIA_TEST, DEFAULT_MEDIA_URL_LOADER_OPTION),
        ("font", "fonts", FONT_TEST, DEFAULT_FONT_URL_LOADER_OPTION),
        ("image", "images", IMAGE_TEST, DEFAULT_IMAGE_URL_LOADER_OPTION),
    )
    user_asset_options = {
        "media": media_url_loader_option,
        "font": font_url_loader_option,
        "image": image_url_loader_option,
    }
    for name, category, test, defaults in asset_rules:
        _set_rule(
            chain,
            name,
            test=re.compile(test),
            use=[
                get_url_loader(
                    [
                        defaults,
                        {"name": f"{static_directory}/{category}/[name].[ext]"},
                        user_asset_options[name],
                    ]
                )
            ],
        )

    return chain


def _set_rule(
    chain: Chain,
    name: str,
    *,
    test: re.Pattern[str] | None = None,
    enforce: str | None = None,
    use: list[Loader] | None = None,
) -> Rule:
    rule = chain.rule(name)
    if test is not None:
        rule.test = test
    if enforce is not None:
        rule.enforce = enforce  # type: ignore[assignment]
    if use is not None:
        rule.use = list(use)
    return rule


def get_entry(custom_entry: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Default bootstrap entry, augmented (not replaced) by caller entries."""
    entry: dict[str, Any] = {
        DEFAULT_ENTRY_NAME: os.path.join(DEFAULT_TEMP_DIRECTORY, DEFAULT_ENTRY_FILE)
    }
    entry.update(custom_entry or {})
    return entry


def get_output(
    *,
    app_path: str,
    output_root: str,
    public_path: str,
    chunk_directory: str,
    custom_output: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    output: dict[str, Any] = {
        "path": os.path.join(app_path, output_root),
        "filename": "js/[name].js",
        "chunkFilename": f"{chunk_directory}/[name].js",
        "publicPath": public_path,
    }
    output.update(custom_output or {})
    return output


def get_devtool(enable_source_map: bool) -> str:
    return SOURCE_MAP_DEVTOOL if enable_source_map else NO_DEVTOOL

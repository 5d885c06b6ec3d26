# src/h5runner/config/config_types.py


import re
from collections.abc import Callable
from typing import Any, Literal, TypedDict

from typing_extensions import NotRequired


RouterMode = Literal["hash", "browser"]
CssModuleNamingPattern = Literal["module", "global"]


class CssModulesConfig(TypedDict, total=False):
    naming_pattern: CssModuleNamingPattern  # default: "global"
    generate_scoped_name: str  # class-name template for scoped css


class CssModulesOption(TypedDict, total=False):
    enable: bool  # default: False
    config: CssModulesConfig


class PostcssPluginOption(TypedDict, total=False):
    enable: bool
    config: dict[str, Any]  # passed verbatim to the plugin


class PostcssOption(TypedDict, total=False):
    autoprefixer: PostcssPluginOption
    pxtransform: PostcssPluginOption
    css_modules: CssModulesOption
    # any other key is treated as an extra postcss plugin (PostcssPluginOption)


class ModuleOption(TypedDict, total=False):
    postcss: PostcssOption


class PluginsOption(TypedDict, total=False):
    babel: dict[str, Any]  # merged into babel-loader options
    uglify: PostcssPluginOption  # enable + config for the script minimizer
    csso: PostcssPluginOption  # enable + config for the css minimizer


class RouterConfig(TypedDict, total=False):
    mode: RouterMode  # default: "hash"
    basename: str  # default: "/"


# Called as mutator(chain, vocabulary) before the config is finalized.
ChainMutatorFunc = Callable[[Any, Any], None]


class BuildConfig(TypedDict, total=False):
    # mode selection
    is_watch: bool

    # project layout
    app_path: str  # project root (defaults to the working directory)
    source_root: str
    output_root: str
    public_path: str
    static_directory: str
    chunk_directory: str

    # sizing
    design_width: int
    device_ratio: dict[str, float]

    # profile switches (defaults depend on the build mode)
    enable_source_map: bool
    enable_extract: bool

    # per-loader option layers
    style_loader_option: dict[str, Any]
    css_loader_option: dict[str, Any]
    sass_loader_option: dict[str, Any]
    less_loader_option: dict[str, Any]
    stylus_loader_option: dict[str, Any]
    font_url_loader_option: dict[str, Any]
    image_url_loader_option: dict[str, Any]
    media_url_loader_option: dict[str, Any]
    mini_css_extract_plugin_option: dict[str, Any]

    # classification
    esnext_modules: list[str | re.Pattern[str]]

    module: ModuleOption
    plugins: PluginsOption

    # substitution
    env: dict[str, Any]
    define_constants: dict[str, Any]
    alias: dict[str, str]

    # entry / output overrides (merged over defaults)
    entry: dict[str, Any]
    output: dict[str, Any]

    router: RouterConfig
    dev_server: dict[str, Any]  # dev-server vocabulary, merged over defaults

    # customization hook
    webpack_chain: NotRequired[ChainMutatorFunc]

    # deprecated, noticed once per build and otherwise ignored
    webpack: NotRequired[Any]
    enable_dll: NotRequired[bool]


class BuildOptionsResolved(TypedDict):
    """Layout options after build_conf() applied its defaults."""

    app_path: str
    source_root: str
    output_root: str
    public_path: str
    static_directory: str
    chunk_directory: str
    design_width: int
    device_ratio: dict[str, float]

# src/h5runner/constants.py
"""Central constants used across the project."""

from typing import Any


# --- env keys ---
DEFAULT_ENV_LOG_LEVEL: str = "LOG_LEVEL"

# --- program defaults ---
DEFAULT_LOG_LEVEL: str = "info"

# --- project layout defaults ---
DEFAULT_SOURCE_ROOT: str = "src"
DEFAULT_OUTPUT_ROOT: str = "dist"
DEFAULT_PUBLIC_PATH: str = "/"
DEFAULT_STATIC_DIRECTORY: str = "static"
DEFAULT_CHUNK_DIRECTORY: str = "chunk"
DEFAULT_DESIGN_WIDTH: int = 750
DEFAULT_DEVICE_RATIO: dict[str, float] = {
    "640": 2.34 / 2,
    "750": 1,
    "828": 1.81 / 2,
}
DEFAULT_TEMP_DIRECTORY: str = ".temp"
DEFAULT_ENTRY_NAME: str = "app"
DEFAULT_ENTRY_FILE: str = "app.js"

# Keys with defaults applied by build_conf() before any profile runs.
DEFAULT_BUILD_OPTIONS: dict[str, Any] = {
    "source_root": DEFAULT_SOURCE_ROOT,
    "output_root": DEFAULT_OUTPUT_ROOT,
    "public_path": DEFAULT_PUBLIC_PATH,
    "static_directory": DEFAULT_STATIC_DIRECTORY,
    "chunk_directory": DEFAULT_CHUNK_DIRECTORY,
    "design_width": DEFAULT_DESIGN_WIDTH,
    "device_ratio": DEFAULT_DEVICE_RATIO,
}

# --- profile defaults ---
DEV_ENABLE_SOURCE_MAP: bool = True
DEV_ENABLE_EXTRACT: bool = False
PROD_ENABLE_SOURCE_MAP: bool = False
PROD_ENABLE_EXTRACT: bool = True
SOURCE_MAP_DEVTOOL: str = "cheap-module-eval-source-map"
NO_DEVTOOL: str = "none"

# --- file-type tests ---
STYLE_TEST: str = r"\.(css|s[ac]ss|less|styl)\b"
SASS_TEST: str = r"\.(s[ac]ss)\b"
LESS_TEST: str = r"\.less\b"
STYLUS_TEST: str = r"\.styl\b"
SCRIPT_TEST: str = r"\.jsx?$"
MEDIA_TEST: str = r"\.(mp4|webm|ogg|mp3|wav|flac|aac)(\?.*)?$"
FONT_TEST: str = r"\.(woff2?|eot|ttf|otf)(\?.*)?$"
IMAGE_TEST: str = r"\.(png|jpe?g|gif|bpm|svg)(\?.*)?$"

CSS_MODULE_FILE: str = r"(.*\.module).*\.(css|s[ac]ss|less|styl)\b"
CSS_GLOBAL_FILE: str = r"(.*\.global).*\.(css|s[ac]ss|less|styl)\b"

# --- classification ---
OPAQUE_DEPENDENCY_ROOT: str = r"\bnode_modules\b"

# Framework component packages. `cnpm` installs scoped packages with `_`
# in place of the scope separator.
FIRST_PARTY_PATTERNS: tuple[str, ...] = (
    r"@tarojs[/\\_]components",
    r"\btaro-components\b",
)
MODERN_DEPENDENCY_PATTERNS: tuple[str, ...] = (
    *FIRST_PARTY_PATTERNS,
    r"@tarojs[/\\_]taro-h5",
    r"\btaro-h5\b",
    r"@tarojs[/\\_]router",
    r"\btaro-router\b",
    r"@tarojs[/\\_]redux-h5",
    r"\btaro-redux-h5\b",
)

# --- loader names ---
STYLE_LOADER: str = "style-loader"
CSS_LOADER: str = "css-loader"
POSTCSS_LOADER: str = "postcss-loader"
RESOLVE_URL_LOADER: str = "resolve-url-loader"
SASS_LOADER: str = "sass-loader"
LESS_LOADER: str = "less-loader"
STYLUS_LOADER: str = "stylus-loader"
BABEL_LOADER: str = "babel-loader"
URL_LOADER: str = "url-loader"
EXTRACT_CSS_LOADER: str = "mini-css-extract-plugin/dist/loader"

# --- plugin names ---
HTML_PLUGIN: str = "html-webpack-plugin"
DEFINE_PLUGIN: str = "webpack.DefinePlugin"
HMR_PLUGIN: str = "webpack.HotModuleReplacementPlugin"
MINI_CSS_EXTRACT_PLUGIN: str = "mini-css-extract-plugin"
UGLIFY_PLUGIN: str = "uglifyjs-webpack-plugin"
CSSO_PLUGIN: str = "csso-webpack-plugin"

# --- loader defaults ---
DEFAULT_URL_LOADER_LIMIT: int = 10240
DEFAULT_MEDIA_URL_LOADER_OPTION: dict[str, Any] = {"limit": DEFAULT_URL_LOADER_LIMIT}
DEFAULT_FONT_URL_LOADER_OPTION: dict[str, Any] = {"limit": DEFAULT_URL_LOADER_LIMIT}
DEFAULT_IMAGE_URL_LOADER_OPTION: dict[str, Any] = {"limit": DEFAULT_URL_LOADER_LIMIT}

DEFAULT_UGLIFY_OPTION: dict[str, Any] = {
    "keep_fnames": True,
    "output": {
        "comments": False,
        "keep_quoted_props": True,
        "quote_keys": True,
        "beautify": False,
    },
    "warnings": False,
}

DEFAULT_CSS_COMPRESS_OPTION: dict[str, Any] = {
    "mergeRules": False,
    "mergeIdents": False,
    "reduceIdents": False,
    "discardUnused": False,
    "minifySelectors": False,
}

DEFAULT_BABEL_LOADER_OPTION: dict[str, Any] = {
    "plugins": [
        "babel-plugin-syntax-dynamic-import",
        ["babel-plugin-transform-react-jsx", {"pragma": "Nerv.createElement"}],
        ["babel-plugin-transform-taroapi", {"packageName": "@tarojs/taro-h5"}],
    ],
}

# namingPattern "module": only `*.module.*` files are scoped.
# namingPattern "global": everything except `*.global.*` files is scoped.
CSS_MODULE_NAMING_PATTERNS: frozenset[str] = frozenset({"module", "global"})
DEFAULT_CSS_MODULE_OPTION: dict[str, Any] = {
    "enable": False,
    "config": {
        "naming_pattern": "global",
        "generate_scoped_name": "[name]__[local]___[hash:base64:5]",
    },
}

# --- postcss defaults ---
POSTCSS_BUILTIN_KEYS: frozenset[str] = frozenset(
    {"autoprefixer", "pxtransform", "css_modules"}
)
DEFAULT_AUTOPREFIXER_OPTION: dict[str, Any] = {
    "enable": True,
    "config": {
        "browsers": ["Android >= 4", "ios >= 6"],
        "flexbox": "no-2009",
    },
}
DEFAULT_PXTRANSFORM_OPTION: dict[str, Any] = {
    "enable": True,
    "config": {"platform": "h5"},
}
DEFAULT_CONSTPARSE_OPTION: dict[str, Any] = {
    "constants": [{"key": "taro-tabbar-height", "val": "50PX"}],
    "platform": "h5",
}

# --- resolve defaults ---
DEFAULT_RESOLVE_EXTENSIONS: list[str] = [".js", ".jsx", ".ts", ".tsx"]
DEFAULT_RESOLVE_MAIN_FIELDS: list[str] = ["main:h5", "browser", "module", "main"]
DEFAULT_RESOLVE_ALIAS: dict[str, str] = {
    "@tarojs/taro": "@tarojs/taro-h5",
}

# --- extraction defaults ---
DEFAULT_MINI_CSS_EXTRACT_OPTION: dict[str, Any] = {
    "filename": "css/[name].css",
    "chunkFilename": "css/[id].css",
}

# --- router defaults ---
ROUTER_MODES: frozenset[str] = frozenset({"hash", "browser"})
DEFAULT_ROUTER_MODE: str = "hash"
DEFAULT_ROUTER_BASENAME: str = "/"

# --- dev server defaults ---
DEFAULT_DEV_SERVER_OPTIONS: dict[str, Any] = {
    "disableHostCheck": True,
    "compress": True,
    "host": "0.0.0.0",  # noqa: S104
    "hot": True,
    "https": False,
    "inline": True,
    "open": True,
    "overlay": True,
    "port": 10086,
    "quiet": True,
    "watchContentBase": True,
    "writeToDisk": False,
}

# --- deprecated options ---
DEPRECATED_OPTIONS: dict[str, str] = {
    "webpack": (
        "The 'webpack' option is no longer supported and is ignored. "
        "Use 'webpack_chain' to customize the build configuration instead."
    ),
    "enable_dll": (
        "The 'enable_dll' option has been removed; separate dll bundles no "
        "longer pay off and the flag is ignored."
    ),
}

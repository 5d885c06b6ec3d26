# src/h5runner/dev_server.py
"""Dev-server option layering and reachable URL computation."""

import os
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlunsplit

from .config.config_types import BuildOptionsResolved
from .constants import (
    DEFAULT_DEV_SERVER_OPTIONS,
    DEFAULT_ROUTER_BASENAME,
    DEFAULT_ROUTER_MODE,
)
from .logs import getAppLogger
from .merge import recursive_merge


def add_leading_slash(url: str) -> str:
    return url if url.startswith("/") else "/" + url


def add_trailing_slash(url: str) -> str:
    return url if url.endswith("/") else url + "/"


def normalize_public_path(public_path: str | None) -> str:
    if not public_path:
        return "/"
    return add_leading_slash(add_trailing_slash(public_path))


def resolve_router(router: Mapping[str, Any] | None) -> tuple[str, str]:
    """Return (mode, basename); unknown modes fall back to hash routing."""
    router = router or {}
    mode = "browser" if router.get("mode") == "browser" else DEFAULT_ROUTER_MODE
    basename = router.get("basename") or DEFAULT_ROUTER_BASENAME
    return mode, basename


def resolve_dev_server_options(
    opts: BuildOptionsResolved, custom: Mapping[str, Any] | None
) -> dict[str, Any]:
    """Merge the derived layer, the base layer and caller overrides, in order."""
    public_path = normalize_public_path(opts["public_path"])
    output_path = os.path.join(opts["app_path"], opts["output_root"])
    derived = {
        "publicPath": public_path,
        "contentBase": output_path,
        "historyApiFallback": {"index": public_path},
    }
    return recursive_merge(derived, DEFAULT_DEV_SERVER_OPTIONS, custom)


def format_dev_url(
    dev_server_options: Mapping[str, Any], router: Mapping[str, Any] | None
) -> str:
    """Return the URL the dev server is reachable at.

    The path is the router basename for browser-history routing and `/`
    otherwise.
    """
    mode, basename = resolve_router(router)
    scheme = "https" if dev_server_options.get("https") else "http"
    host = str(dev_server_options.get("host") or "localhost")
    port = dev_server_options.get("port")
    netloc = f"{host}:{port}" if port is not None else host
    path = add_leading_slash(basename) if mode == "browser" else "/"
    url = urlunsplit((scheme, netloc, path, "", ""))
    getAppLogger().trace(f"[dev_server] reachable at {url}")
    return url

# tests/50_core/test_dev_server.py
"""Tests for dev-server option layering and URL formatting."""

import os

import pytest

import h5runner.dev_server as mod_dev_server
import h5runner.profiles as mod_profiles
from tests.utils import make_build_config


@pytest.mark.parametrize(
    ("public_path", "expected"),
    [("", "/"), (None, "/"), ("/", "/"), ("static", "/static/"), ("/a/b", "/a/b/")],
)
def test_normalize_public_path(public_path: str | None, expected: str) -> None:
    """Public paths always begin and end with a slash."""
    # --- execute and verify ---
    assert mod_dev_server.normalize_public_path(public_path) == expected


def test_options_layering() -> None:
    """Derived values, then base defaults, then caller overrides."""
    # --- setup ---
    opts = mod_profiles.build_conf(make_build_config(public_path="assets"))

    # --- execute ---
    options = mod_dev_server.resolve_dev_server_options(
        opts, {"port": 3000, "historyApiFallback": {"disableDotRule": True}}
    )

    # --- verify ---
    assert options["publicPath"] == "/assets/"
    assert options["contentBase"] == os.path.join("/app", "dist")
    assert options["historyApiFallback"] == {
        "index": "/assets/",
        "disableDotRule": True,
    }
    assert options["port"] == 3000
    assert options["host"] == "0.0.0.0"
    assert options["open"] is True


def test_caller_can_override_derived_values() -> None:
    """A caller layer beats the values derived from the layout."""
    # --- setup ---
    opts = mod_profiles.build_conf(make_build_config())

    # --- execute ---
    options = mod_dev_server.resolve_dev_server_options(
        opts, {"publicPath": "/custom/"}
    )

    # --- verify ---
    assert options["publicPath"] == "/custom/"


@pytest.mark.parametrize(
    ("server", "router", "expected"),
    [
        (
            {"host": "localhost", "port": 8080},
            {"mode": "hash"},
            "http://localhost:8080/",
        ),
        ({"host": "localhost", "port": 8080}, None, "http://localhost:8080/"),
        (
            {"host": "localhost", "port": 8080},
            {"mode": "browser", "basename": "/shop"},
            "http://localhost:8080/shop",
        ),
        (
            {"host": "localhost", "port": 8080},
            {"mode": "browser", "basename": "shop/"},
            "http://localhost:8080/shop/",
        ),
        (
            {"host": "localhost", "port": 8080},
            {"mode": "hash", "basename": "/shop"},
            "http://localhost:8080/",
        ),
        (
            {"host": "example.test", "port": 443, "https": True},
            {"mode": "browser"},
            "https://example.test:443/",
        ),
        (
            {"host": "localhost", "port": 8080},
            {"mode": "memory"},
            "http://localhost:8080/",
        ),
    ],
)
def test_format_dev_url(
    server: dict[str, object], router: dict[str, object] | None, expected: str
) -> None:
    """The URL path is the basename only for browser-history routing."""
    # --- execute and verify ---
    assert mod_dev_server.format_dev_url(server, router) == expected


def test_resolve_router_defaults() -> None:
    """Missing router settings mean hash routing at the root."""
    # --- execute and verify ---
    assert mod_dev_server.resolve_router(None) == ("hash", "/")
    assert mod_dev_server.resolve_router({"mode": "browser"}) == ("browser", "/")

# tests/50_core/test_hooks.py
"""Tests for the chain customization hook."""

from typing import Any

import h5runner.chain as mod_chain
import h5runner.hooks as mod_hooks
import h5runner.profiles as mod_profiles
from tests.utils import make_build_config


def test_no_hook_means_noop() -> None:
    """A missing hook leaves the chain as assembled."""
    # --- setup ---
    chain = mod_profiles.dev_conf(make_build_config())
    before = chain.to_config()

    # --- execute ---
    mod_hooks.customize_chain(chain, mod_hooks.as_mutator(None), mod_chain)

    # --- verify ---
    assert chain.to_config() == before


def test_non_callable_hook_falls_back_to_noop() -> None:
    """A non-callable hook value is ignored."""
    # --- execute and verify ---
    assert mod_hooks.as_mutator("not a function") is mod_hooks.noop_mutator
    assert mod_hooks.as_mutator(None) is mod_hooks.noop_mutator


def test_hook_receives_chain_and_vocabulary() -> None:
    """The hook gets the live chain and the toolchain vocabulary."""
    # --- setup ---
    seen: list[Any] = []
    vocabulary = object()

    def hook(chain: mod_chain.Chain, vocab: Any) -> None:
        seen.append((chain, vocab))

    chain = mod_chain.Chain()

    # --- execute ---
    result = mod_hooks.customize_chain(chain, mod_hooks.as_mutator(hook), vocabulary)

    # --- verify ---
    assert result is chain
    assert seen == [(chain, vocabulary)]


def test_hook_overrides_assembled_defaults() -> None:
    """Whatever the hook changes is what gets finalized."""
    # --- setup ---
    def hook(chain: mod_chain.Chain, vocab: Any) -> None:
        chain.devtool = "source-map"
        chain.delete_rule("postcss")
        chain.delete_plugin("hotModuleReplacementPlugin")
        jsx = chain.rule("jsx")
        jsx.use.append(vocab.Loader("eslint-loader"))

    chain = mod_profiles.dev_conf(make_build_config())

    # --- execute ---
    mod_hooks.customize_chain(chain, hook, mod_chain)
    config = chain.to_config()

    # --- verify ---
    assert config["devtool"] == "source-map"
    assert "hotModuleReplacementPlugin" not in chain.plugins
    assert "postcss" not in chain.rules
    assert [u["loader"] for u in chain.rules["jsx"].to_config()["use"]] == [
        "babel-loader",
        "eslint-loader",
    ]

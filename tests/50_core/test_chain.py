# tests/50_core/test_chain.py
"""Tests for the Chain handle and its rule vocabulary."""

import re

import h5runner.chain as mod_chain


def test_check_condition_kinds() -> None:
    """Regexes search, strings match as prefixes, callables are called."""
    # --- setup ---
    path = "/app/src/index.jsx"

    # --- execute and verify ---
    assert mod_chain.check_condition(re.compile(r"\.jsx$"), path)
    assert mod_chain.check_condition("/app/src", path)
    assert not mod_chain.check_condition("src", path)
    assert mod_chain.check_condition(lambda p: p.endswith("x"), path)


def test_rule_include_and_exclude() -> None:
    """Include must match (when given) and exclude must not."""
    # --- setup ---
    rule = mod_chain.Rule(
        "jsx",
        test=re.compile(r"\.jsx?$"),
        include=["/app/"],
        exclude=[re.compile(r"vendor")],
    )

    # --- execute and verify ---
    assert rule.applies_to("/app/src/a.js")
    assert not rule.applies_to("/app/vendor/a.js")
    assert not rule.applies_to("/other/a.js")
    assert not rule.applies_to("/app/src/a.css")


def test_one_of_selects_first_matching_variant_else_default() -> None:
    """Variants are tried in order; the default catches everything else."""
    # --- setup ---
    one_of = mod_chain.OneOf(
        default=mod_chain.RuleVariant("plain", use=[mod_chain.Loader("plain")]),
        variants=[
            mod_chain.RuleVariant(
                "scoped",
                use=[mod_chain.Loader("scoped")],
                include=[re.compile(r"\.module\.")],
            )
        ],
    )

    # --- execute and verify ---
    assert one_of.select("a.module.css").name == "scoped"
    assert one_of.select("a.css").name == "plain"
    assert one_of.names() == ["scoped", "plain"]


def test_route_orders_pre_normal_post() -> None:
    """Stages run pre, then normal, then post, whatever the declaration order."""
    # --- setup ---
    chain = mod_chain.Chain()
    css = re.compile(r"\.css$")
    chain.rule("last").test = css
    chain.rule("last").enforce = "post"
    chain.rule("last").use = [mod_chain.Loader("style-loader")]
    chain.rule("middle").test = css
    chain.rule("middle").use = [mod_chain.Loader("css-loader")]
    chain.rule("first").test = css
    chain.rule("first").enforce = "pre"
    chain.rule("first").use = [mod_chain.Loader("sass-loader")]

    # --- execute ---
    pipeline = chain.route("/app/a.css")

    # --- verify ---
    assert [name for name, _ in pipeline] == ["first", "middle", "last"]


def test_rule_is_get_or_create() -> None:
    """rule(name) returns the same rule object on repeated lookups."""
    # --- setup ---
    chain = mod_chain.Chain()

    # --- execute ---
    rule = chain.rule("jsx")

    # --- verify ---
    assert chain.rule("jsx") is rule
    chain.delete_rule("jsx")
    assert "jsx" not in chain.rules
    chain.delete_rule("missing")


def test_to_config_returns_fresh_mapping() -> None:
    """Mutating an exported config never leaks back into the chain."""
    # --- setup ---
    chain = mod_chain.Chain(entry={"app": "a.js"})
    chain.plugin("define", "webpack.DefinePlugin", [{"X": 1}])
    chain.rule("jsx").use = [mod_chain.Loader("babel-loader", {"plugins": ["p"]})]

    # --- execute ---
    first = chain.to_config()
    first["entry"]["app"] = "changed"
    first["plugins"][0]["args"][0]["X"] = 2
    first["module"]["rules"][0]["use"][0]["options"]["plugins"].append("q")
    second = chain.to_config()

    # --- verify ---
    assert second["entry"] == {"app": "a.js"}
    assert second["plugins"] == [{"plugin": "webpack.DefinePlugin", "args": [{"X": 1}]}]
    assert second["module"]["rules"][0]["use"][0]["options"] == {"plugins": ["p"]}


def test_to_config_layout() -> None:
    """The exported mapping carries every chain section."""
    # --- setup ---
    chain = mod_chain.Chain(mode="production", devtool="none", minimize=True)
    chain.minimizers["uglify"] = mod_chain.PluginSpec("uglifyjs-webpack-plugin")
    chain.rule("css").one_of = mod_chain.OneOf(
        default=mod_chain.RuleVariant("plain")
    )

    # --- execute ---
    config = chain.to_config()

    # --- verify ---
    assert config["mode"] == "production"
    assert config["optimization"] == {
        "minimize": True,
        "minimizer": [{"plugin": "uglifyjs-webpack-plugin", "args": []}],
    }
    assert config["module"]["rules"] == [{"oneOf": [{"use": []}]}]


def test_delete_plugin() -> None:
    """Plugins can be removed by name; unknown names are ignored."""
    # --- setup ---
    chain = mod_chain.Chain()
    chain.plugin("hmr", "webpack.HotModuleReplacementPlugin")

    # --- execute ---
    chain.delete_plugin("hmr")
    chain.delete_plugin("missing")

    # --- verify ---
    assert chain.plugins == {}

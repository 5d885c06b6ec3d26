# src/h5runner/chain.py
"""Mutable build-configuration handle and its rule/plugin vocabulary.

A `Chain` is what profiles assemble and what the customization hook
receives. Rules and plugins are kept by name so callers can look them
up, tweak, add or remove them. `Chain.to_config()` produces the plain
mapping handed to the compiler.
"""

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any, Literal

from .merge import recursive_merge


Enforce = Literal["pre", "post"]
Predicate = Callable[[str], bool]
# A regex is searched in the path; a str is an absolute path prefix.
Condition = re.Pattern[str] | str | Predicate

STAGE_ORDER: dict[Enforce | None, int] = {"pre": 0, None: 1, "post": 2}


def check_condition(condition: Condition, path: str) -> bool:
    if isinstance(condition, re.Pattern):
        return bool(condition.search(path))
    if isinstance(condition, str):
        return path.startswith(condition)
    return bool(condition(path))


def _conditions_hold(
    include: list[Condition], exclude: list[Condition], path: str
) -> bool:
    if include and not any(check_condition(c, path) for c in include):
        return False
    return not any(check_condition(c, path) for c in exclude)


def _export_conditions(conditions: list[Condition]) -> list[Condition]:
    return list(conditions)


@dataclass
class Loader:
    """One processing step: a loader name and its options."""

    loader: str
    options: dict[str, Any] = field(default_factory=dict)

    def to_config(self) -> dict[str, Any]:
        return {"loader": self.loader, "options": recursive_merge(self.options)}


@dataclass
class RuleVariant:
    """One alternative of a `OneOf` set."""

    name: str
    use: list[Loader] = field(default_factory=list)
    include: list[Condition] = field(default_factory=list)
    exclude: list[Condition] = field(default_factory=list)

    def matches(self, path: str) -> bool:
        return _conditions_hold(self.include, self.exclude, path)

    def to_config(self) -> dict[str, Any]:
        out: dict[str, Any] = {"use": [ldr.to_config() for ldr in self.use]}
        if self.include:
            out["include"] = _export_conditions(self.include)
        if self.exclude:
            out["exclude"] = _export_conditions(self.exclude)
        return out


@dataclass
class OneOf:
    """Mutually exclusive alternatives with a predicate-free fallback.

    Variants are tried in declared order; the first one whose conditions
    hold is selected, otherwise `default` is.
    """

    default: RuleVariant
    variants: list[RuleVariant] = field(default_factory=list)

    def select(self, path: str) -> RuleVariant:
        for variant in self.variants:
            if variant.matches(path):
                return variant
        return self.default

    def names(self) -> list[str]:
        return [v.name for v in self.variants] + [self.default.name]

    def to_config(self) -> list[dict[str, Any]]:
        return [v.to_config() for v in [*self.variants, self.default]]


@dataclass
class Rule:
    name: str
    test: re.Pattern[str] | None = None
    use: list[Loader] = field(default_factory=list)
    enforce: Enforce | None = None
    include: list[Condition] = field(default_factory=list)
    exclude: list[Condition] = field(default_factory=list)
    one_of: OneOf | None = None

    def applies_to(self, path: str) -> bool:
        if self.test is not None and not self.test.search(path):
            return False
        return _conditions_hold(self.include, self.exclude, path)

    def loaders_for(self, path: str) -> list[Loader]:
        """Return the steps this rule contributes for `path`."""
        if not self.applies_to(path):
            return []
        steps = list(self.use)
        if self.one_of is not None:
            steps.extend(self.one_of.select(path).use)
        return steps

    def get_loader(self, loader: str) -> Loader | None:
        for ldr in self.use:
            if ldr.loader == loader:
                return ldr
        return None

    def to_config(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.test is not None:
            out["test"] = self.test
        if self.enforce is not None:
            out["enforce"] = self.enforce
        if self.include:
            out["include"] = _export_conditions(self.include)
        if self.exclude:
            out["exclude"] = _export_conditions(self.exclude)
        if self.use:
            out["use"] = [ldr.to_config() for ldr in self.use]
        if self.one_of is not None:
            out["oneOf"] = self.one_of.to_config()
        return out


@dataclass
class PluginSpec:
    """A compiler plugin identified by name, constructed with `args`."""

    plugin: str
    args: list[Any] = field(default_factory=list)

    def to_config(self) -> dict[str, Any]:
        return {
            "plugin": self.plugin,
            "args": [
                recursive_merge(a) if isinstance(a, dict) else a for a in self.args
            ],
        }


@dataclass
class Chain:
    mode: Literal["development", "production"] = "development"
    devtool: str = "none"
    entry: dict[str, Any] = field(default_factory=dict)
    output: dict[str, Any] = field(default_factory=dict)
    resolve: dict[str, Any] = field(default_factory=dict)
    rules: dict[str, Rule] = field(default_factory=dict)
    plugins: dict[str, PluginSpec] = field(default_factory=dict)
    minimize: bool = False
    minimizers: dict[str, PluginSpec] = field(default_factory=dict)

    # --- rules ---

    def rule(self, name: str) -> Rule:
        """Return the rule named `name`, creating an empty one if missing."""
        if name not in self.rules:
            self.rules[name] = Rule(name)
        return self.rules[name]

    def delete_rule(self, name: str) -> None:
        self.rules.pop(name, None)

    def ordered_rules(self) -> Iterator[Rule]:
        """Yield rules by stage (pre, normal, post), declared order within."""
        yield from sorted(self.rules.values(), key=lambda r: STAGE_ORDER[r.enforce])

    def route(self, path: str) -> list[tuple[str, list[Loader]]]:
        """Return the (rule name, steps) pipeline that `path` goes through."""
        pipeline: list[tuple[str, list[Loader]]] = []
        for rule in self.ordered_rules():
            steps = rule.loaders_for(path)
            if steps:
                pipeline.append((rule.name, steps))
        return pipeline

    # --- plugins ---

    def plugin(
        self, name: str, plugin: str, args: list[Any] | None = None
    ) -> PluginSpec:
        spec = PluginSpec(plugin, list(args or []))
        self.plugins[name] = spec
        return spec

    def delete_plugin(self, name: str) -> None:
        self.plugins.pop(name, None)

    # --- finalization ---

    def to_config(self) -> dict[str, Any]:
        """Return a fresh, plain mapping of the whole configuration."""
        return {
            "mode": self.mode,
            "devtool": self.devtool,
            "entry": recursive_merge(self.entry),
            "output": recursive_merge(self.output),
            "resolve": recursive_merge(self.resolve),
            "module": {"rules": [r.to_config() for r in self.rules.values()]},
            "plugins": [p.to_config() for p in self.plugins.values()],
            "optimization": {
                "minimize": self.minimize,
                "minimizer": [m.to_config() for m in self.minimizers.values()],
            },
        }

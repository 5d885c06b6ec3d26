# src/h5runner/classify.py
"""Classification of module paths into processing classes.

Each file seen by the compiler falls into exactly one class:

- ``first_party``: the framework's own component packages. These ship
  pre-processed styles and are injected ahead of application styles.
- ``modern``: dependencies whitelisted as already using modern syntax,
  so they still go through script transformation.
- ``opaque``: any other path under the dependency root, skipped by
  script and postcss processing.
- ``app``: everything else (the project's own sources).
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Literal

from .constants import (
    FIRST_PARTY_PATTERNS,
    MODERN_DEPENDENCY_PATTERNS,
    OPAQUE_DEPENDENCY_ROOT,
)
from .logs import getAppLogger


ModuleClass = Literal["first_party", "modern", "opaque", "app"]

# Tested in this order; the first class with a matching pattern wins.
CLASS_PRECEDENCE: tuple[ModuleClass, ...] = ("first_party", "modern")

_OPAQUE_ROOT = re.compile(OPAQUE_DEPENDENCY_ROOT)


def compile_module_pattern(value: str | re.Pattern[str]) -> re.Pattern[str] | None:
    """Compile a user-supplied module pattern.

    Strings are anchored on word boundaries. Compiled patterns pass
    through. Strings that are not valid patterns return None.
    """
    if isinstance(value, re.Pattern):
        return value
    try:
        return re.compile(rf"\b{value}\b")
    except re.error as e:
        getAppLogger().warning(
            "Ignoring invalid esnext module pattern %r: %s", value, e
        )
        return None


def build_patterns(
    extra_modern: Iterable[str | re.Pattern[str]] = (),
) -> tuple[tuple[ModuleClass, re.Pattern[str]], ...]:
    """Return the ordered (class, pattern) pairs used for classification."""
    pairs: list[tuple[ModuleClass, re.Pattern[str]]] = [
        ("first_party", re.compile(p)) for p in FIRST_PARTY_PATTERNS
    ]
    pairs.extend(("modern", re.compile(p)) for p in MODERN_DEPENDENCY_PATTERNS)
    for value in extra_modern:
        compiled = compile_module_pattern(value)
        if compiled is not None:
            pairs.append(("modern", compiled))
    return tuple(pairs)


@dataclass(frozen=True)
class ModuleClassifier:
    patterns: tuple[tuple[ModuleClass, re.Pattern[str]], ...] = field(
        default_factory=build_patterns
    )

    @classmethod
    def from_esnext_modules(
        cls, esnext_modules: Iterable[str | re.Pattern[str]] | None = None
    ) -> "ModuleClassifier":
        if not isinstance(esnext_modules, (list, tuple)):
            esnext_modules = ()
        return cls(build_patterns(esnext_modules))

    def _matches(self, module_class: ModuleClass, path: str) -> bool:
        return any(
            pattern.search(path)
            for cls_name, pattern in self.patterns
            if cls_name == module_class
        )

    @staticmethod
    def is_opaque_root(path: str) -> bool:
        return bool(_OPAQUE_ROOT.search(path))

    def classify(self, path: str) -> ModuleClass:
        for module_class in CLASS_PRECEDENCE:
            if self._matches(module_class, path):
                return module_class
        if self.is_opaque_root(path):
            return "opaque"
        return "app"


@dataclass(frozen=True)
class ClassPredicate:
    """Rule condition that holds when a path falls into one of `classes`."""

    classifier: ModuleClassifier
    classes: frozenset[ModuleClass]

    def __call__(self, path: str) -> bool:
        return self.classifier.classify(path) in self.classes

    def __repr__(self) -> str:
        return f"ClassPredicate({sorted(self.classes)})"

# src/h5runner/config/config_validate.py


from collections.abc import Mapping
from dataclasses import dataclass, field
from difflib import get_close_matches
from typing import Any, get_type_hints

from h5runner.constants import CSS_MODULE_NAMING_PATTERNS, ROUTER_MODES
from h5runner.logs import getAppLogger

from .config_types import BuildConfig


@dataclass
class ValidationSummary:
    """Non-fatal findings about a build config.

    Validation never rejects a config: anything flagged here falls back
    to its documented default during assembly.
    """

    warnings: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.warnings


def schema_from_typeddict(td: type[Any]) -> dict[str, Any]:
    """Extract field names and their annotated types from a TypedDict."""
    return get_type_hints(td, include_extras=True)


def _collect(msg: str, summary: ValidationSummary) -> None:
    getAppLogger().warning(msg)
    summary.warnings.append(msg)


def _check_unknown_keys(config: Mapping[str, Any], summary: ValidationSummary) -> None:
    known = sorted(schema_from_typeddict(BuildConfig))
    for key in config:
        if key in known:
            continue
        msg = f"Unknown build config key {key!r}; it will be ignored."
        close = get_close_matches(str(key), known, n=1, cutoff=0.6)
        if close:
            msg += f" Hint: did you mean {close[0]!r}?"
        _collect(msg, summary)


def _check_router(config: Mapping[str, Any], summary: ValidationSummary) -> None:
    router = config.get("router")
    if not isinstance(router, Mapping):
        return
    mode = router.get("mode")
    if mode is not None and mode not in ROUTER_MODES:
        _collect(
            f"Unknown router mode {mode!r}; falling back to 'hash' "
            f"(expected one of {sorted(ROUTER_MODES)}).",
            summary,
        )


def _check_css_modules(config: Mapping[str, Any], summary: ValidationSummary) -> None:
    module = config.get("module")
    postcss = module.get("postcss") if isinstance(module, Mapping) else None
    css_modules = postcss.get("css_modules") if isinstance(postcss, Mapping) else None
    if not isinstance(css_modules, Mapping):
        return
    cfg = css_modules.get("config")
    pattern = cfg.get("naming_pattern") if isinstance(cfg, Mapping) else None
    if pattern is not None and pattern not in CSS_MODULE_NAMING_PATTERNS:
        _collect(
            f"Unknown css_modules naming_pattern {pattern!r}; "
            "falling back to 'global' behaviour.",
            summary,
        )


def validate_build_config(config: Mapping[str, Any]) -> ValidationSummary:
    """Check a caller build config and log anything that will be ignored."""
    logger = getAppLogger()
    logger.trace(f"[validate_build_config] Validating {len(config)} keys")

    summary = ValidationSummary()
    _check_unknown_keys(config, summary)
    _check_router(config, summary)
    _check_css_modules(config, summary)
    return summary

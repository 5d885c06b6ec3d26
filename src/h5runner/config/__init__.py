# src/h5runner/config/__init__.py

"""Build config types and validation."""

from .config_types import (
    BuildConfig,
    BuildOptionsResolved,
    ChainMutatorFunc,
    CssModulesConfig,
    CssModulesOption,
    ModuleOption,
    PluginsOption,
    PostcssOption,
    PostcssPluginOption,
    RouterConfig,
    RouterMode,
)
from .config_validate import ValidationSummary, validate_build_config


__all__ = [  # noqa: RUF022
    # config_types
    "BuildConfig",
    "BuildOptionsResolved",
    "ChainMutatorFunc",
    "CssModulesConfig",
    "CssModulesOption",
    "ModuleOption",
    "PluginsOption",
    "PostcssOption",
    "PostcssPluginOption",
    "RouterConfig",
    "RouterMode",
    # config_validate
    "ValidationSummary",
    "validate_build_config",
]

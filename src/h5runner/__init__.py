# src/h5runner/__init__.py

"""H5 Runner: layered build configuration and build orchestration.

Full developer API
==================
This package re-exports all non-private symbols from its submodules,
making it suitable for programmatic use and custom toolchains.
Anything prefixed with "_" is considered internal and may change.

Highlights:
    - run_build_async()     → Run a production or development build
    - run_build()           → Blocking wrapper around run_build_async()
    - dev_conf() / prod_conf() → Assemble a profile's chain
    - recursive_merge()     → Merge option layers
    - ModuleClassifier      → Classify module paths
"""

from .build import BuildSession, BuildState, run_build, run_build_async
from .chain import Chain, Loader, OneOf, PluginSpec, Rule, RuleVariant
from .classify import ClassPredicate, ModuleClass, ModuleClassifier
from .config import BuildConfig, ValidationSummary, validate_build_config
from .dev_server import format_dev_url, resolve_dev_server_options
from .errors import (
    BuildError,
    CompilerFatalError,
    DeprecatedOptionWarning,
    InvalidLayer,
    ServerBindError,
)
from .hooks import ChainMutator, customize_chain, noop_mutator
from .logs import getAppLogger
from .merge import recursive_merge
from .meta import PROGRAM_DISPLAY, PROGRAM_ENV, PROGRAM_PACKAGE
from .notices import NoticeTracker
from .profiles import base_conf, build_conf, dev_conf, prod_conf
from .reporting import BuildReporter, LogReporter
from .toolchain import BuildEvent, BuildStats, Compiler, DevServer, Toolchain


__all__ = [  # noqa: RUF022
    # build
    "BuildSession",
    "BuildState",
    "run_build_async",
    "run_build",
    # chain
    "Chain",
    "Loader",
    "OneOf",
    "PluginSpec",
    "Rule",
    "RuleVariant",
    # classify
    "ClassPredicate",
    "ModuleClass",
    "ModuleClassifier",
    # config
    "BuildConfig",
    "ValidationSummary",
    "validate_build_config",
    # dev_server
    "format_dev_url",
    "resolve_dev_server_options",
    # errors
    "BuildError",
    "CompilerFatalError",
    "DeprecatedOptionWarning",
    "InvalidLayer",
    "ServerBindError",
    # hooks
    "ChainMutator",
    "customize_chain",
    "noop_mutator",
    # logs
    "getAppLogger",
    # merge
    "recursive_merge",
    # meta
    "PROGRAM_DISPLAY",
    "PROGRAM_ENV",
    "PROGRAM_PACKAGE",
    # notices
    "NoticeTracker",
    # profiles
    "base_conf",
    "build_conf",
    "dev_conf",
    "prod_conf",
    # reporting
    "BuildReporter",
    "LogReporter",
    # toolchain
    "BuildEvent",
    "BuildStats",
    "Compiler",
    "DevServer",
    "Toolchain",
]

# tests/utils/__init__.py

from .buildconfig import (
    APP_PATHS,
    FIRST_PARTY_PATHS,
    MODERN_PATHS,
    OPAQUE_PATHS,
    css_modules_config,
    make_build_config,
    make_chain,
    rule_names,
)
from .constants import DEFAULT_TEST_LOG_LEVEL, PROJ_ROOT
from .toolchain import (
    FakeCompiler,
    FakeDevServer,
    RecordingReporter,
    ToolchainRecord,
    make_toolchain,
)


__all__ = [  # noqa: RUF022
    # buildconfig
    "APP_PATHS",
    "FIRST_PARTY_PATHS",
    "MODERN_PATHS",
    "OPAQUE_PATHS",
    "css_modules_config",
    "make_build_config",
    "make_chain",
    "rule_names",
    # constants
    "DEFAULT_TEST_LOG_LEVEL",
    "PROJ_ROOT",
    # toolchain
    "FakeCompiler",
    "FakeDevServer",
    "RecordingReporter",
    "ToolchainRecord",
    "make_toolchain",
]

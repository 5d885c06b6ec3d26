# tests/50_core/test_build_prod.py
"""Tests for one-shot production builds."""

import inspect
from typing import Any

import pytest

import h5runner as mod_h5runner
import h5runner.build as mod_build
import h5runner.chain as mod_chain
import h5runner.errors as mod_errors
import h5runner.profiles as mod_profiles
from h5runner.reporting import LogReporter
from tests.utils import RecordingReporter, make_build_config, make_toolchain


@pytest.mark.asyncio
async def test_prod_build_succeeds() -> None:
    """A clean compile finishes the session exactly once."""
    # --- setup ---
    config = make_build_config()
    toolchain, record = make_toolchain()
    reporter = RecordingReporter()

    # --- execute ---
    session = await mod_build.run_build_async(config, toolchain, reporter=reporter)

    # --- verify ---
    assert session.state is mod_build.BuildState.SUCCEEDED
    (compiler,) = record.compilers
    assert compiler.run_calls == 1
    assert compiler.config == mod_profiles.prod_conf(config).to_config()
    assert reporter.prod_bound == [compiler]
    assert reporter.dev_bound == []
    assert record.servers == []


@pytest.mark.asyncio
async def test_prod_fatal_error() -> None:
    """A fatal compiler error fails the build and never starts a server."""
    # --- setup ---
    cause = RuntimeError("out of memory")
    toolchain, record = make_toolchain(compile_error=cause)
    reporter = RecordingReporter()
    session = mod_build.BuildSession(make_build_config(), toolchain, reporter=reporter)

    # --- execute ---
    with pytest.raises(mod_errors.CompilerFatalError) as exc_info:
        await session.run()

    # --- verify ---
    assert exc_info.value.cause is cause
    assert exc_info.value.__cause__ is cause
    assert reporter.errors == [cause]
    assert session.state is mod_build.BuildState.FAILED
    assert record.servers == []
    assert record.opened == []


@pytest.mark.asyncio
async def test_prod_callback_from_another_thread() -> None:
    """Completion reported from a worker thread still settles the build."""
    # --- setup ---
    toolchain, record = make_toolchain(threaded=True)

    # --- execute ---
    session = await mod_build.run_build_async(
        make_build_config(), toolchain, reporter=RecordingReporter()
    )

    # --- verify ---
    assert session.state is mod_build.BuildState.SUCCEEDED
    assert record.compilers[0].run_calls == 1


@pytest.mark.asyncio
async def test_prod_late_callbacks_are_ignored() -> None:
    """Only the first completion callback counts."""
    # --- setup ---
    toolchain, _record = make_toolchain(repeat_callback=True)

    # --- execute ---
    session = await mod_build.run_build_async(
        make_build_config(), toolchain, reporter=RecordingReporter()
    )

    # --- verify ---
    assert session.state is mod_build.BuildState.SUCCEEDED


@pytest.mark.asyncio
async def test_prod_hook_runs_before_finalization() -> None:
    """The customization hook's changes reach the compiler config."""
    # --- setup ---
    def hook(chain: mod_chain.Chain, vocab: Any) -> None:
        chain.devtool = "hidden-source-map"
        chain.minimizers.clear()

    toolchain, record = make_toolchain()

    # --- execute ---
    session = await mod_build.run_build_async(
        make_build_config(webpack_chain=hook), toolchain, reporter=RecordingReporter()
    )

    # --- verify ---
    (compiler,) = record.compilers
    assert compiler.config["devtool"] == "hidden-source-map"
    assert compiler.config["optimization"]["minimizer"] == []
    assert session.final_config == compiler.config


@pytest.mark.asyncio
async def test_prod_hook_receives_toolchain_vocabulary() -> None:
    """The hook is handed the toolchain's vocabulary object."""
    # --- setup ---
    seen: list[Any] = []
    vocabulary = object()
    toolchain, _record = make_toolchain(vocabulary=vocabulary)

    # --- execute ---
    await mod_build.run_build_async(
        make_build_config(webpack_chain=lambda chain, vocab: seen.append(vocab)),
        toolchain,
        reporter=RecordingReporter(),
    )

    # --- verify ---
    assert seen == [vocabulary]


@pytest.mark.asyncio
async def test_prod_deprecated_options_noticed_once() -> None:
    """Deprecated keys each produce one notice for the invocation."""
    # --- setup ---
    toolchain, _record = make_toolchain()
    config = make_build_config(webpack={"devtool": "eval"}, enable_dll=True)

    # --- execute ---
    session = await mod_build.run_build_async(
        config, toolchain, reporter=RecordingReporter()
    )

    # --- verify ---
    assert session.notices.keys == {"webpack", "enable_dll"}
    assert len(session.notices.emitted) == 2
    # the deprecated option has no effect on the config
    assert session.final_config is not None
    assert session.final_config["devtool"] == "none"


@pytest.mark.asyncio
async def test_session_is_single_use() -> None:
    """Running the same session twice is an error."""
    # --- setup ---
    toolchain, _record = make_toolchain()
    session = mod_build.BuildSession(
        make_build_config(), toolchain, reporter=RecordingReporter()
    )
    await session.run()

    # --- execute and verify ---
    with pytest.raises(RuntimeError, match="already used"):
        await session.run()
    assert session.state is mod_build.BuildState.SUCCEEDED


def test_default_reporter_logs() -> None:
    """Without a reporter the logger-backed one is used."""
    # --- setup ---
    toolchain, _record = make_toolchain()

    # --- execute ---
    session = mod_build.BuildSession(make_build_config(), toolchain)

    # --- verify ---
    assert isinstance(session.reporter, LogReporter)
    assert session.state is mod_build.BuildState.IDLE


@pytest.mark.asyncio
async def test_hook_errors_propagate() -> None:
    """An exception raised by the hook fails the build unchanged."""
    # --- setup ---
    def hook(chain: mod_chain.Chain, vocab: Any) -> None:
        raise KeyError("no such rule")

    toolchain, record = make_toolchain()
    session = mod_build.BuildSession(
        make_build_config(webpack_chain=hook), toolchain, reporter=RecordingReporter()
    )

    # --- execute ---
    with pytest.raises(KeyError, match="no such rule"):
        await session.run()

    # --- verify ---
    assert session.state is mod_build.BuildState.FAILED
    assert record.compilers == []


def test_build_module_is_not_shadowed_by_package_exports() -> None:
    """Importing the package keeps h5runner.build bound to the module."""
    # --- execute and verify ---
    assert inspect.ismodule(mod_h5runner.build)
    assert mod_h5runner.build is mod_build
    assert mod_h5runner.run_build_async is mod_build.run_build_async

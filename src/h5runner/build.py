# src/h5runner/build.py
"""Build orchestration for production and development modes.

`run_build_async()` picks the mode from the ``is_watch`` flag:

- production: assemble, customize, finalize, run the compiler once;
- development: assemble, customize, finalize, start the dev server and
  return once it is listening.

Both complete exactly once. Collaborator callbacks may arrive on any
thread and are marshalled onto the running event loop.
"""

import asyncio
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

from .chain import Chain
from .config.config_types import BuildConfig
from .config.config_validate import validate_build_config
from .constants import DEPRECATED_OPTIONS
from .dev_server import format_dev_url, resolve_dev_server_options
from .errors import CompilerFatalError, ServerBindError
from .hooks import as_mutator, customize_chain
from .logs import getAppLogger
from .notices import NoticeTracker
from .profiles import build_conf, dev_conf, prod_conf
from .reporting import BuildReporter, LogReporter
from .toolchain import BuildStats, Toolchain


class BuildState(Enum):
    IDLE = "idle"
    CONFIGURING = "configuring"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def _settle_once(
    loop: asyncio.AbstractEventLoop,
    future: "asyncio.Future[None]",
) -> Callable[[BaseException | None], None]:
    """Return a thread-safe callback that settles `future` the first time."""

    def _apply(error: BaseException | None) -> None:
        if future.done():
            return
        if error is None:
            future.set_result(None)
        else:
            future.set_exception(error)

    def settle(error: BaseException | None) -> None:
        # Callbacks arriving after the loop has shut down are ignored.
        if loop.is_closed():
            return
        loop.call_soon_threadsafe(_apply, error)

    return settle


class BuildSession:
    """State for one build invocation.

    A session is single-use: it owns its notice tracker and the chain it
    assembles, and runs through IDLE → CONFIGURING → RUNNING → SUCCEEDED
    or FAILED exactly once.
    """

    def __init__(
        self,
        config: BuildConfig,
        toolchain: Toolchain,
        *,
        reporter: BuildReporter | None = None,
    ) -> None:
        self.config = config
        self.toolchain = toolchain
        self.reporter: BuildReporter = reporter or LogReporter()
        self.notices = NoticeTracker()
        self.state = BuildState.IDLE
        self.chain: Chain | None = None
        self.final_config: dict[str, Any] | None = None
        self.dev_url: str | None = None
        self.dev_server_options: dict[str, Any] | None = None
        self.browser_future: asyncio.Future[Any] | None = None

    # --- state ---

    def _transition(self, state: BuildState) -> None:
        getAppLogger().debug(f"[build] {self.state.value} → {state.value}")
        self.state = state

    # --- shared steps ---

    def _notice_deprecated(self, *keys: str) -> None:
        for key in keys:
            if key in self.config:
                self.notices.warn_once(key, DEPRECATED_OPTIONS[key])

    def _finalize(self, chain: Chain) -> dict[str, Any]:
        customize_chain(
            chain,
            as_mutator(self.config.get("webpack_chain")),
            self.toolchain.vocabulary,
        )
        self.chain = chain
        self.final_config = chain.to_config()
        return self.final_config

    # --- modes ---

    async def run(self) -> None:
        if self.state is not BuildState.IDLE:
            msg = f"Build session already used (state={self.state.value})"
            raise RuntimeError(msg)
        self._transition(BuildState.CONFIGURING)
        try:
            validate_build_config(self.config)
            if self.config.get("is_watch"):
                await self._build_dev()
            else:
                await self._build_prod()
        except BaseException:
            self._transition(BuildState.FAILED)
            raise
        self._transition(BuildState.SUCCEEDED)

    async def _build_prod(self) -> None:
        logger = getAppLogger()
        final_config = self._finalize(prod_conf(self.config))
        self._notice_deprecated("webpack", "enable_dll")

        loop = asyncio.get_running_loop()
        done: asyncio.Future[None] = loop.create_future()
        settle = _settle_once(loop, done)

        compiler = self.toolchain.create_compiler(final_config)
        self.reporter.bind_prod(compiler)

        def _on_complete(
            error: BaseException | None, stats: BuildStats | None = None
        ) -> None:
            if error is not None:
                self.reporter.print_build_error(error)
                settle(CompilerFatalError(str(error), cause=error))
                return
            logger.trace(f"[build] compiler finished (stats={stats!r})")
            settle(None)

        self._transition(BuildState.RUNNING)
        logger.info("Starting production build...")
        compiler.run(_on_complete)
        await done

    async def _build_dev(self) -> None:
        logger = getAppLogger()
        if self.toolchain.create_dev_server is None:
            msg = "Watch mode requires a toolchain with create_dev_server"
            raise ValueError(msg)

        opts = build_conf(self.config)
        final_config = self._finalize(dev_conf(self.config))
        self._notice_deprecated("webpack", "enable_dll")

        dev_server_options = resolve_dev_server_options(
            opts, self.config.get("dev_server")
        )
        dev_url = format_dev_url(dev_server_options, self.config.get("router"))
        self.dev_server_options = dev_server_options
        self.dev_url = dev_url

        if self.toolchain.add_dev_server_entrypoints is not None:
            self.toolchain.add_dev_server_entrypoints(final_config, dev_server_options)

        loop = asyncio.get_running_loop()
        listening: asyncio.Future[None] = loop.create_future()
        settle = _settle_once(loop, listening)

        compiler = self.toolchain.create_compiler(final_config)
        self.reporter.bind_dev(dev_url, compiler)
        server = self.toolchain.create_dev_server(compiler, dev_server_options)

        answered = False

        def _on_listen(error: BaseException | None) -> None:
            nonlocal answered
            # Only the first listen result counts.
            if answered or loop.is_closed():
                return
            answered = True
            if error is not None:
                logger.error("Dev server failed to start: %s", error)
                settle(ServerBindError(str(error), cause=error))
                return
            settle(None)
            if dev_server_options.get("open"):
                loop.call_soon_threadsafe(self._start_browser, loop, dev_url)

        self._transition(BuildState.RUNNING)
        logger.info("Starting dev server...")
        server.listen(
            dev_server_options["port"], dev_server_options["host"], _on_listen
        )
        await listening

    def _start_browser(self, loop: asyncio.AbstractEventLoop, url: str) -> None:
        """Launch the browser on a worker thread without waiting for it."""
        future = loop.run_in_executor(None, self.toolchain.open_browser, url)
        self.browser_future = future

        def _log_failure(done: "asyncio.Future[Any]") -> None:
            if done.cancelled():
                return
            error = done.exception()
            if error is not None:
                getAppLogger().debug(
                    f"[build] could not open browser for {url}: {error}"
                )

        future.add_done_callback(_log_failure)


async def run_build_async(
    config: BuildConfig,
    toolchain: Toolchain,
    *,
    reporter: BuildReporter | None = None,
) -> BuildSession:
    """Run one build and return its finished session.

    Raises:
        CompilerFatalError: the production compiler reported a fatal error.
        ServerBindError: the dev server could not start listening.
        InvalidLayer: a config layer was not a mapping.
    """
    session = BuildSession(config, toolchain, reporter=reporter)
    await session.run()
    return session


def run_build(
    config: Mapping[str, Any],
    toolchain: Toolchain,
    *,
    reporter: BuildReporter | None = None,
) -> BuildSession:
    """Blocking wrapper around `run_build_async()`."""
    return asyncio.run(
        run_build_async(config, toolchain, reporter=reporter)  # type: ignore[arg-type]
    )

# src/h5runner/reporting.py
"""Human-readable progress and error reporting for builds."""

from typing import Protocol

from .logs import getAppLogger
from .toolchain import BuildEvent, Compiler


class BuildReporter(Protocol):
    def bind_prod(self, compiler: Compiler) -> None: ...

    def bind_dev(self, url: str, compiler: Compiler) -> None: ...

    def print_build_error(self, error: BaseException) -> None: ...


def format_build_error(error: BaseException) -> str:
    """Return a multi-line report for a fatal compiler error."""
    lines = ["Build failed:", f"  {type(error).__name__}: {error}"]
    details = getattr(error, "details", None)
    if details:
        lines.extend(f"    {line}" for line in str(details).splitlines())
    return "\n".join(lines)


class LogReporter:
    """Reports build events through the app logger."""

    def __init__(self) -> None:
        self.dev_url: str | None = None
        self._first_done = True

    def bind_prod(self, compiler: Compiler) -> None:
        compiler.add_listener(self._on_prod_event)

    def bind_dev(self, url: str, compiler: Compiler) -> None:
        self.dev_url = url
        compiler.add_listener(self._on_dev_event)

    def print_build_error(self, error: BaseException) -> None:
        getAppLogger().error(format_build_error(error))

    # --- event handlers ---

    def _report_stats(self, event: BuildEvent) -> None:
        logger = getAppLogger()
        stats = event.stats
        if stats is None:
            return
        for message in stats.errors:
            logger.error(message)
        for message in stats.warnings:
            logger.warning(message)

    def _on_prod_event(self, event: BuildEvent) -> None:
        logger = getAppLogger()
        if event.kind == "compile":
            logger.info("Compiling...")
            return
        if event.kind != "done":
            return
        self._report_stats(event)
        if event.stats is not None and event.stats.has_errors():
            logger.error("Build finished with errors.")
        else:
            logger.info("Build finished.")

    def _on_dev_event(self, event: BuildEvent) -> None:
        logger = getAppLogger()
        if event.kind == "invalid":
            logger.info("File changed: %s", event.changed_file or "<unknown>")
            return
        if event.kind == "compile":
            logger.info("Compiling...")
            return
        self._report_stats(event)
        if event.stats is not None and event.stats.has_errors():
            logger.error("Compiled with errors.")
            return
        logger.info("Compiled successfully.")
        if self._first_done:
            self._first_done = False
            logger.info("App running at: %s", self.dev_url)

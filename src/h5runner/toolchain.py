# src/h5runner/toolchain.py
"""Contracts for the external compiler, dev server and browser launcher."""

import webbrowser
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Literal, Protocol

from . import chain as chain_vocabulary


BuildEventKind = Literal["compile", "invalid", "done"]


@dataclass
class BuildStats:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    duration_ms: float | None = None

    def has_errors(self) -> bool:
        return bool(self.errors)

    def has_warnings(self) -> bool:
        return bool(self.warnings)


@dataclass
class BuildEvent:
    """A progress notification emitted by the compiler."""

    kind: BuildEventKind
    stats: BuildStats | None = None
    changed_file: str | None = None


# callback(error, stats): error is None on success.
CompileCallback = Callable[[BaseException | None, BuildStats | None], None]
ListenCallback = Callable[[BaseException | None], None]
BuildListener = Callable[[BuildEvent], None]


class Compiler(Protocol):
    def run(self, callback: CompileCallback) -> None: ...

    def add_listener(self, listener: BuildListener) -> None: ...


class DevServer(Protocol):
    def listen(self, port: int, host: str, callback: ListenCallback) -> None: ...


def _open_browser(url: str) -> Any:
    return webbrowser.open(url)


@dataclass
class Toolchain:
    """The collaborators a build drives.

    `create_compiler` receives the finalized config. In development mode
    the compiler is handed to `create_dev_server`, which is responsible
    for watching and serving its output.
    """

    create_compiler: Callable[[dict[str, Any]], Compiler]
    create_dev_server: Callable[[Compiler, dict[str, Any]], DevServer] | None = None
    add_dev_server_entrypoints: (
        Callable[[dict[str, Any], dict[str, Any]], None] | None
    ) = None
    open_browser: Callable[[str], Any] = _open_browser
    vocabulary: Any = field(default=chain_vocabulary)


# src/h5runner/errors.py
"""Exception types raised by the configuration and build layers."""

from typing import Any


class InvalidLayer(TypeError):  # noqa: N818
    """A configuration layer was not a mapping."""

    def __init__(self, layer: Any, position: int) -> None:
        self.layer = layer
        self.position = position
        super().__init__(
            f"Option layer #{position} must be a mapping, "
            f"got {type(layer).__name__}: {layer!r}"
        )


class BuildError(RuntimeError):
    """Base class for failures reported by the compiler or dev server."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause
        self.__cause__ = cause


class CompilerFatalError(BuildError):
    """The compiler reported a fatal error for a one-shot build."""


class ServerBindError(BuildError):
    """The dev server failed to start listening."""


class DeprecatedOptionWarning(DeprecationWarning):
    """A deprecated config option is still set."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(message)
        self.key = key
        self.message = message

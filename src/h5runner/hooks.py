# src/h5runner/hooks.py
"""Caller hook that mutates the assembled chain before finalization."""

from typing import Any, Protocol

from .chain import Chain
from .logs import getAppLogger


class ChainMutator(Protocol):
    def __call__(self, chain: Chain, vocabulary: Any) -> None: ...


def noop_mutator(chain: Chain, vocabulary: Any) -> None:  # noqa: ARG001
    """Mutator used when the caller supplies none."""


def as_mutator(func: Any) -> ChainMutator:
    """Return `func` if it is callable, else the no-op mutator."""
    if callable(func):
        return func  # type: ignore[no-any-return]
    if func is not None:
        getAppLogger().warning(
            "Ignoring webpack_chain: expected a callable, got %s",
            type(func).__name__,
        )
    return noop_mutator


def customize_chain(chain: Chain, mutator: ChainMutator, vocabulary: Any) -> Chain:
    """Run `mutator` on `chain`; its changes override assembled defaults."""
    logger = getAppLogger()
    if mutator is not noop_mutator:
        logger.debug("[hooks] applying chain customization")
    mutator(chain, vocabulary)
    return chain

"""Speculative local state changes with compensating rollback."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")


@dataclass
class OptimisticUpdate:
    """Pair of local state transitions around one remote call.

    ``apply`` installs the predicted state; ``revert`` restores the previous
    state and runs only when the remote call raises.
    """

    apply: Callable[[], None]
    revert: Callable[[], None]

    async def run(self, call: Callable[[], Awaitable[T]]) -> T:
        """Apply, await ``call``, and revert if it raises. The exception propagates."""
        self.apply()
        try:
            return await call()
        except BaseException:
            self.revert()
            raise

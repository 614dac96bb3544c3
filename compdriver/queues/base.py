"""Queue contract consumed by the driver."""

from __future__ import annotations

from typing import Callable, Protocol

from ..models import CompilationUnit, Context

CompilationHandler = Callable[[Context, CompilationUnit], None]


class Queue(Protocol):
    """A sequence of compilation units delivered one at a time.

    ``next`` pulls one unit and invokes ``handler`` on it exactly once. It raises
    :class:`~compdriver.errors.QueueExhausted` when no units remain, and any
    other exception when the next unit cannot be supplied. Whether a handler
    failure is re-raised or absorbed is up to the queue.
    """

    def next(self, ctx: Context, handler: CompilationHandler) -> None:
        ...

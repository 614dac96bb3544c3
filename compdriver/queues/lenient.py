"""Queue wrapper that records per-unit failures instead of aborting the run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .base import CompilationHandler, Queue
from ..logging import get_logger
from ..models import CompilationUnit, Context


@dataclass
class UnitFailure:
    """A compilation whose handler raised, with the exception it raised."""

    signature: str
    error: Exception


class LenientQueue:
    """Wraps ``inner`` and absorbs handler failures so the driver keeps going.

    Exhaustion and failures of the inner queue itself still propagate.
    """

    def __init__(self, inner: Queue) -> None:
        self.inner = inner
        self.failures: List[UnitFailure] = []
        self.logger = get_logger("queues.lenient")

    def next(self, ctx: Context, handler: CompilationHandler) -> None:
        def _absorbing(ctx: Context, unit: CompilationUnit) -> None:
            try:
                handler(ctx, unit)
            except Exception as exc:
                self.logger.error("Compilation %s failed: %s", unit.signature, exc)
                self.failures.append(UnitFailure(signature=unit.signature, error=exc))

        self.inner.next(ctx, _absorbing)

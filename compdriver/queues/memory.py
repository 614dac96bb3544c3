"""In-memory queue over a fixed sequence of compilation units."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterable

from .base import CompilationHandler
from ..errors import QueueExhausted
from ..models import CompilationUnit, Context


class ListQueue:
    """Delivers units in order; handler failures propagate to the caller."""

    def __init__(self, units: Iterable[CompilationUnit]) -> None:
        self._pending: Deque[CompilationUnit] = deque(units)

    def __len__(self) -> int:
        return len(self._pending)

    def next(self, ctx: Context, handler: CompilationHandler) -> None:
        if not self._pending:
            raise QueueExhausted()
        # Popped first so a failing unit is not redelivered.
        unit = self._pending.popleft()
        handler(ctx, unit)

"""Tests for the in-memory queue."""

from __future__ import annotations

import pytest

from compdriver.errors import QueueExhausted
from compdriver.models import CompilationUnit, Context
from compdriver.queues import ListQueue


def test_list_queue_delivers_units_in_order_then_exhausts() -> None:
    units = [CompilationUnit(signature="a"), CompilationUnit(signature="b")]
    queue = ListQueue(units)
    seen: list[str] = []

    queue.next(Context(), lambda ctx, unit: seen.append(unit.signature))
    queue.next(Context(), lambda ctx, unit: seen.append(unit.signature))

    assert seen == ["a", "b"]
    with pytest.raises(QueueExhausted):
        queue.next(Context(), lambda ctx, unit: seen.append(unit.signature))
    assert seen == ["a", "b"]


def test_list_queue_propagates_handler_failure_without_redelivery() -> None:
    queue = ListQueue([CompilationUnit(signature="a"), CompilationUnit(signature="b")])
    error = RuntimeError("boom")

    def failing(ctx, unit):
        raise error

    with pytest.raises(RuntimeError) as excinfo:
        queue.next(Context(), failing)

    assert excinfo.value is error
    assert len(queue) == 1

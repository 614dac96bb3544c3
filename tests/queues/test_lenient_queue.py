"""Tests for the failure-absorbing queue wrapper."""

from __future__ import annotations

import logging

import pytest

from compdriver.errors import QueueError, QueueExhausted
from compdriver.models import CompilationUnit, Context
from compdriver.queues import LenientQueue, ListQueue


def test_lenient_queue_records_handler_failures(caplog: pytest.LogCaptureFixture) -> None:
    queue = LenientQueue(ListQueue([CompilationUnit(signature="a"), CompilationUnit(signature="b")]))
    error = RuntimeError("analysis failed")

    def handler(ctx, unit):
        if unit.signature == "a":
            raise error

    with caplog.at_level(logging.ERROR, logger="compdriver.queues.lenient"):
        queue.next(Context(), handler)
        queue.next(Context(), handler)

    assert len(queue.failures) == 1
    assert queue.failures[0].signature == "a"
    assert queue.failures[0].error is error
    assert "analysis failed" in caplog.text
    with pytest.raises(QueueExhausted):
        queue.next(Context(), handler)


def test_lenient_queue_propagates_inner_queue_failures() -> None:
    class BrokenQueue:
        def next(self, ctx, handler):
            raise QueueError("backend down")

    queue = LenientQueue(BrokenQueue())

    with pytest.raises(QueueError, match="backend down"):
        queue.next(Context(), lambda ctx, unit: None)
    assert queue.failures == []

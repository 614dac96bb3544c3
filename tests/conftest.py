from __future__ import annotations

import logging
from typing import Iterator

import pytest


@pytest.fixture(autouse=True)
def _reset_compdriver_logger() -> Iterator[None]:
    """Undo configure_logging so caplog sees compdriver records in every test."""
    yield
    logger = logging.getLogger("compdriver")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)

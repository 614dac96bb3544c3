"""Tests for compdriver.logging."""

from __future__ import annotations

import logging
from pathlib import Path

from compdriver.logging import configure_logging, get_logger


def test_configure_logging_writes_component_records_to_log_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "run.log"

    configure_logging(verbose=True, log_file=log_file)
    configure_logging(verbose=True, log_file=log_file)
    get_logger("driver").debug("Analyzing compilation %s", "//pkg:lib")
    for handler in logging.getLogger("compdriver").handlers:
        handler.flush()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert "DEBUG compdriver.driver: Analyzing compilation //pkg:lib" in lines[0]
    assert len(logging.getLogger("compdriver").handlers) == 2

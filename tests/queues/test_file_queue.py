"""Tests for the file-backed queue."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from compdriver.errors import QueueError, QueueExhausted
from compdriver.models import Context
from compdriver.queues import FileQueue


def _drain(queue: FileQueue) -> list[str]:
    seen: list[str] = []
    while True:
        try:
            queue.next(Context(), lambda ctx, unit: seen.append(unit.signature))
        except QueueExhausted:
            return seen


def test_file_queue_reads_json_and_yaml_units_in_order(tmp_path: Path) -> None:
    first = tmp_path / "first.json"
    first.write_text(
        json.dumps(
            {
                "signature": "//pkg:lib",
                "language": "go",
                "source_files": ["lib.go", "util.go"],
                "arguments": ["-trimpath"],
            }
        ),
        encoding="utf-8",
    )
    second = tmp_path / "second.yaml"
    second.write_text(
        """
- signature: "//pkg:bin"
  source_files: [main.go]
- signature: "//pkg:test"
""",
        encoding="utf-8",
    )

    queue = FileQueue([first, second])
    units = []
    while True:
        try:
            queue.next(Context(), lambda ctx, unit: units.append(unit))
        except QueueExhausted:
            break

    assert [unit.signature for unit in units] == ["//pkg:lib", "//pkg:bin", "//pkg:test"]
    assert units[0].source_files == ("lib.go", "util.go")
    assert units[0].arguments == ("-trimpath",)
    assert units[1].source_files == ("main.go",)


def test_file_queue_reports_malformed_file_without_invoking_handler(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    queue = FileQueue([broken])
    seen: list[str] = []

    with pytest.raises(QueueError):
        queue.next(Context(), lambda ctx, unit: seen.append(unit.signature))

    assert seen == []


def test_file_queue_rejects_unit_without_signature(tmp_path: Path) -> None:
    path = tmp_path / "unit.json"
    path.write_text(json.dumps({"language": "go"}), encoding="utf-8")

    with pytest.raises(QueueError, match="signature"):
        FileQueue([path]).next(Context(), lambda ctx, unit: None)


def test_file_queue_reports_missing_file(tmp_path: Path) -> None:
    with pytest.raises(QueueError, match="Failed to read"):
        FileQueue([tmp_path / "missing.json"]).next(Context(), lambda ctx, unit: None)


def test_file_queue_skips_files_with_no_units(tmp_path: Path) -> None:
    empty = tmp_path / "empty.json"
    empty.write_text("[]", encoding="utf-8")
    unit = tmp_path / "unit.json"
    unit.write_text(json.dumps({"signature": "only"}), encoding="utf-8")

    assert _drain(FileQueue([empty, unit])) == ["only"]


def test_file_queue_reports_undecodable_file(tmp_path: Path) -> None:
    path = tmp_path / "latin1.json"
    path.write_bytes(b'{"signature": "caf\xe9"}')
    seen: list[str] = []

    with pytest.raises(QueueError, match="Failed to read"):
        FileQueue([path]).next(Context(), lambda ctx, unit: seen.append(unit.signature))
    assert seen == []

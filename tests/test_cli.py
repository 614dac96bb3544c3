"""CLI parser and command tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from compdriver.cli import _build_parser, main


def test_cli_accepts_verbose_before_and_after_command() -> None:
    parser = _build_parser()
    assert parser.parse_args(["--verbose", "run"]).verbose is True
    assert parser.parse_args(["run", "--verbose"]).verbose is True


def test_cli_run_options() -> None:
    parser = _build_parser()
    args = parser.parse_args(
        [
            "run",
            "a.json",
            "b.yaml",
            "--file-data-service",
            "localhost:1234",
            "--command",
            "indexer --stdin",
            "--keep-going",
        ]
    )
    assert args.command == "run"
    assert args.units == ["a.json", "b.yaml"]
    assert args.file_data_service == "localhost:1234"
    assert args.analyzer_command == "indexer --stdin"
    assert args.keep_going is True


def test_cli_run_writes_outputs(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    unit = tmp_path / "unit.json"
    unit.write_text(
        json.dumps({"signature": "//pkg:lib", "source_files": ["lib.go"]}), encoding="utf-8"
    )
    output = tmp_path / "out.jsonl"

    main(["run", str(unit), "--config", str(tmp_path), "--output", str(output)])

    lines = output.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line) for line in lines] == [{"source": "//pkg:lib", "value": "lib.go"}]
    assert "Analyzed 1 compilation(s), 1 output(s) written" in capsys.readouterr().err


def test_cli_run_exits_nonzero_on_failure(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["run", str(tmp_path / "missing.json"), "--config", str(tmp_path)])

    assert excinfo.value.code == 1
    assert "compdriver run failed" in capsys.readouterr().err

"""Configuration loading for compdriver (.compdriver.yml)."""

from __future__ import annotations

import glob
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError

CONFIG_FILENAME = ".compdriver.yml"


@dataclass
class AnalyzerConfig:
    """Which analyzer to run and how to build it."""

    name: str = "echo"
    command: List[str] = field(default_factory=list)
    timeout: Optional[float] = None


@dataclass
class QueueConfig:
    """Where compilation units come from and how failures are treated."""

    paths: List[str] = field(default_factory=list)
    keep_going: bool = False


@dataclass
class OutputConfig:
    """Destination for analysis outputs."""

    path: Optional[Path] = None


@dataclass
class DriverConfig:
    """Represents the settings defined in .compdriver.yml."""

    root: Path
    file_data_service: str = ""
    analyzer: AnalyzerConfig = field(default_factory=AnalyzerConfig)
    queue: QueueConfig = field(default_factory=QueueConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    scratch_dir: Optional[Path] = None
    log_file: Optional[Path] = None

    def unit_paths(self) -> List[Path]:
        """Expand queue path patterns relative to the config root, preserving order."""
        resolved: List[Path] = []
        for pattern in self.queue.paths:
            candidate = Path(pattern)
            if not candidate.is_absolute():
                candidate = self.root / candidate
            if any(char in pattern for char in "*?["):
                matches = glob.glob(str(candidate), recursive=True)
                resolved.extend(sorted(Path(match) for match in matches))
            else:
                resolved.append(candidate)
        return resolved


def load_config(config_path: Path) -> DriverConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DriverConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    analyzer_data = _as_dict(data.get("analyzer"))
    analyzer = AnalyzerConfig()
    if analyzer_data:
        analyzer.name = _as_str(analyzer_data.get("name")) or analyzer.name
        analyzer.command = _as_command(analyzer_data.get("command"))
        analyzer.timeout = _as_float(analyzer_data.get("timeout"))

    queue_data = _as_dict(data.get("queue"))
    queue = QueueConfig()
    if queue_data:
        queue.paths = _as_str_list(queue_data.get("paths"))
        queue.keep_going = _as_bool(queue_data.get("keep_going")) or False

    output_data = _as_dict(data.get("output"))
    output = OutputConfig()
    output_path = _as_str(output_data.get("path")) if output_data else None
    if output_path:
        output.path = root / output_path

    scratch_dir = _as_str(data.get("scratch_dir"))
    log_file = _as_str(data.get("log_file"))

    return DriverConfig(
        root=root,
        file_data_service=_as_str(data.get("file_data_service")) or "",
        analyzer=analyzer,
        queue=queue,
        output=output,
        scratch_dir=root / scratch_dir if scratch_dir else None,
        log_file=root / log_file if log_file else None,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_command(value: Any) -> List[str]:
    if isinstance(value, str):
        return shlex.split(value)
    return _as_str_list(value)


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []

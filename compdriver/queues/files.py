"""Queue that reads compilation units from JSON or YAML files on disk."""

from __future__ import annotations

import json
from collections import deque
from pathlib import Path
from typing import Any, Deque, Iterable, List

import yaml

from .base import CompilationHandler
from ..errors import QueueError, QueueExhausted
from ..logging import get_logger
from ..models import CompilationUnit, Context

_YAML_SUFFIXES = {".yml", ".yaml"}


class FileQueue:
    """Delivers the units stored in ``paths``, parsing each file only when it is reached.

    A file holds either one unit mapping or a list of them. Files that cannot
    be read or parsed raise :class:`QueueError` without invoking the handler.
    """

    def __init__(self, paths: Iterable[Path | str]) -> None:
        self._paths: Deque[Path] = deque(Path(path) for path in paths)
        self._buffered: Deque[CompilationUnit] = deque()
        self.logger = get_logger("queues.files")

    def next(self, ctx: Context, handler: CompilationHandler) -> None:
        while not self._buffered:
            if not self._paths:
                raise QueueExhausted()
            path = self._paths.popleft()
            self._buffered.extend(self._load(path))
        unit = self._buffered.popleft()
        handler(ctx, unit)

    def _load(self, path: Path) -> List[CompilationUnit]:
        self.logger.debug("Loading compilation units from %s", path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise QueueError(f"Failed to read {path}: {exc}") from exc

        try:
            data = _parse(path, text)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise QueueError(f"Failed to parse {path}: {exc}") from exc

        entries = data if isinstance(data, list) else [data]
        units: List[CompilationUnit] = []
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise QueueError(f"{path}: entry {index} is not a mapping")
            try:
                units.append(CompilationUnit.from_dict(entry))
            except ValueError as exc:
                raise QueueError(f"{path}: entry {index}: {exc}") from exc
        return units


def _parse(path: Path, text: str) -> Any:
    if path.suffix.lower() in _YAML_SUFFIXES:
        return yaml.safe_load(text)
    return json.loads(text)

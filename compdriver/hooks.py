"""Bundled setup and teardown hooks."""

from __future__ import annotations

import hashlib
import shutil
from pathlib import Path

from .logging import get_logger
from .models import CompilationUnit, Context


class ScratchDirectoryHooks:
    """Gives each compilation a private scratch directory for the duration of its analysis."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)
        self.logger = get_logger("hooks")

    def path_for(self, unit: CompilationUnit) -> Path:
        digest = hashlib.sha256(unit.signature.encode("utf-8")).hexdigest()[:16]
        return self.root / digest

    def setup(self, ctx: Context, unit: CompilationUnit) -> None:
        path = self.path_for(unit)
        path.mkdir(parents=True, exist_ok=False)
        self.logger.debug("Created scratch directory %s for %s", path, unit.signature)

    def teardown(self, ctx: Context, unit: CompilationUnit) -> None:
        path = self.path_for(unit)
        shutil.rmtree(path)
        self.logger.debug("Removed scratch directory %s", path)


__all__ = ["ScratchDirectoryHooks"]

"""Assembles a driver from configuration and runs it."""

from __future__ import annotations

import contextlib
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, TextIO

from .analyzers import Analyzer, discover_analyzer
from .config import DriverConfig
from .driver import Driver, RunStats
from .hooks import ScratchDirectoryHooks
from .logging import get_logger
from .models import Context
from .outputs import JSONLinesSink
from .queues import FileQueue, LenientQueue, Queue, UnitFailure


@dataclass
class PipelineResult:
    """Summary of a completed run."""

    stats: RunStats
    outputs_written: int
    failures: List[UnitFailure] = field(default_factory=list)


def build_analyzer(config: DriverConfig) -> Analyzer:
    """Instantiate the configured analyzer."""
    options = {}
    if config.analyzer.name.lower() == "command":
        if not config.analyzer.command:
            raise ValueError("The 'command' analyzer needs a command to run")
        options = {"command": config.analyzer.command, "timeout": config.analyzer.timeout}
    return discover_analyzer(config.analyzer.name, **options)


def run_pipeline(
    config: DriverConfig,
    *,
    unit_paths: Optional[Sequence[Path]] = None,
    ctx: Context | None = None,
    analyzer: Analyzer | None = None,
) -> PipelineResult:
    """Analyze every unit file named by ``unit_paths`` (or the config) and write outputs.

    Raises whatever the driver raises: queue failures always, and per-unit
    failures unless ``config.queue.keep_going`` is set.
    """
    logger = get_logger("pipeline")
    paths = list(unit_paths) if unit_paths is not None else config.unit_paths()
    if not paths:
        raise ValueError("No compilation unit files to analyze")
    logger.info("Queued %d compilation unit file(s)", len(paths))

    queue: Queue = FileQueue(paths)
    lenient: Optional[LenientQueue] = None
    if config.queue.keep_going:
        lenient = LenientQueue(queue)
        queue = lenient

    hooks = ScratchDirectoryHooks(config.scratch_dir) if config.scratch_dir else None

    with _open_output(config.output.path) as stream:
        sink = JSONLinesSink(stream)
        driver = Driver(
            analyzer or build_analyzer(config),
            queue,
            sink,
            file_data_service=config.file_data_service,
            setup=hooks.setup if hooks else None,
            teardown=hooks.teardown if hooks else None,
        )
        driver.run(ctx or Context())

    return PipelineResult(
        stats=driver.stats,
        outputs_written=sink.count,
        failures=list(lenient.failures) if lenient else [],
    )


@contextlib.contextmanager
def _open_output(path: Optional[Path]) -> Iterator[TextIO]:
    if path is None:
        yield sys.stdout
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        yield handle


__all__ = ["PipelineResult", "build_analyzer", "run_pipeline"]

"""Sequential driver that sends compilations from a queue to an analyzer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .analyzers.base import Analyzer, OutputFunc
from .errors import AnalysisPhaseError, QueueExhausted
from .logging import get_logger
from .models import AnalysisRequest, CompilationUnit, Context
from .queues.base import Queue

CompilationFunc = Callable[[Context, CompilationUnit], None]


@dataclass
class RunStats:
    """Per-run counters, reported in the run summary only.

    Reset at the start of every :meth:`Driver.run`; nothing in the driver reads
    them back to decide what to do next.
    """

    units: int = 0
    failed_units: int = 0


class Driver:
    """Sends compilations sequentially from a queue to an analyzer.

    ``setup`` is called after a compilation has been pulled from the queue and
    before it is sent to the analyzer. ``output`` receives every analysis output
    the analyzer emits. ``teardown`` is called once the analyzer has returned and
    no further outputs will be emitted for that compilation. Either hook may be
    left unset.
    """

    def __init__(
        self,
        analyzer: Analyzer,
        compilations: Queue,
        output: OutputFunc,
        *,
        file_data_service: str = "",
        setup: Optional[CompilationFunc] = None,
        teardown: Optional[CompilationFunc] = None,
    ) -> None:
        self.analyzer = analyzer
        self.compilations = compilations
        self.output = output
        self.file_data_service = file_data_service
        self.setup = setup
        self.teardown = teardown
        self.stats = RunStats()
        self.logger = get_logger("driver")

    def run(self, ctx: Context) -> None:
        """Analyze every compilation the queue yields until it is exhausted.

        Returns normally once the queue raises :class:`QueueExhausted`. Any other
        exception raised by the queue, including a handler failure the queue
        chose to propagate, ends the run and is re-raised unchanged.
        """
        self.stats = RunStats()
        while True:
            try:
                self.compilations.next(ctx, self._handle)
            except QueueExhausted:
                self.logger.info(
                    "Analysis run finished: %d units, %d failed",
                    self.stats.units,
                    self.stats.failed_units,
                )
                return

    def _handle(self, ctx: Context, unit: CompilationUnit) -> None:
        self.stats.units += 1
        self.logger.debug("Analyzing compilation %s", unit.signature)
        try:
            self._analyze_unit(ctx, unit)
        except Exception:
            self.stats.failed_units += 1
            raise

    def _analyze_unit(self, ctx: Context, unit: CompilationUnit) -> None:
        if self.setup is not None:
            try:
                self.setup(ctx, unit)
            except Exception as exc:
                raise AnalysisPhaseError("setup", exc) from exc

        request = AnalysisRequest(compilation=unit, file_data_service=self.file_data_service)
        analysis_error: Optional[BaseException] = None
        try:
            self.analyzer.analyze(ctx, request, self.output)
        except BaseException as exc:  # includes KeyboardInterrupt and SystemExit
            analysis_error = exc

        if self.teardown is not None:
            try:
                self.teardown(ctx, unit)
            except Exception as teardown_error:
                if analysis_error is None:
                    raise AnalysisPhaseError("teardown", teardown_error) from teardown_error
                self.logger.warning(
                    "analysis teardown error after analysis error: %s (analysis error: %s)",
                    teardown_error,
                    analysis_error,
                )

        if analysis_error is not None:
            raise analysis_error


__all__ = ["CompilationFunc", "Driver", "RunStats"]

"""Analyzer that reports the source files of each compilation."""

from __future__ import annotations

from .base import Analyzer, OutputFunc
from ..models import AnalysisOutput, AnalysisRequest, Context


class EchoAnalyzer(Analyzer):
    """Emits one output per source file, in the order the unit lists them."""

    def analyze(self, ctx: Context, request: AnalysisRequest, output: OutputFunc) -> None:
        unit = request.compilation
        for path in unit.source_files:
            ctx.raise_if_cancelled()
            output(ctx, AnalysisOutput(value=path, source=unit.signature))

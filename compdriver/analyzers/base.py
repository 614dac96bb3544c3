"""Base classes for analyzer plugins."""

from abc import ABC, abstractmethod
from typing import Callable

from ..models import AnalysisOutput, AnalysisRequest, Context

OutputFunc = Callable[[Context, AnalysisOutput], None]


class Analyzer(ABC):
    """Contract for analyzers that stream outputs for one compilation at a time."""

    @abstractmethod
    def analyze(self, ctx: Context, request: AnalysisRequest, output: OutputFunc) -> None:
        """Analyze ``request.compilation``, passing each result to ``output`` as it is produced.

        Failures, including those raised by ``output``, propagate to the caller.
        """

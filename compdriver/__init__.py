"""Sequential driver that feeds compilation units from a queue to an analyzer."""

from .driver import CompilationFunc, Driver, RunStats
from .errors import AnalysisPhaseError, QueueExhausted
from .models import AnalysisOutput, AnalysisRequest, CompilationUnit, Context

__all__ = [
    "AnalysisOutput",
    "AnalysisPhaseError",
    "AnalysisRequest",
    "CompilationFunc",
    "CompilationUnit",
    "Context",
    "Driver",
    "QueueExhausted",
    "RunStats",
]

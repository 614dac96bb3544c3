"""Queue implementations feeding compilation units to the driver."""

from .base import CompilationHandler, Queue
from .files import FileQueue
from .lenient import LenientQueue, UnitFailure
from .memory import ListQueue

__all__ = [
    "CompilationHandler",
    "FileQueue",
    "LenientQueue",
    "ListQueue",
    "Queue",
    "UnitFailure",
]

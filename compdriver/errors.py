"""Exception types raised across compdriver."""

from __future__ import annotations

from typing import Literal

Phase = Literal["setup", "teardown"]


class QueueExhausted(Exception):
    """Raised by a queue when no further compilation units remain."""


class QueueError(RuntimeError):
    """Raised when a queue cannot supply the next compilation unit."""


class AnalyzerError(RuntimeError):
    """Raised when an analyzer fails to process a compilation unit."""


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


class AnalysisPhaseError(RuntimeError):
    """Failure of a setup or teardown hook, tagged with the phase it came from."""

    def __init__(self, phase: Phase, cause: BaseException) -> None:
        super().__init__(f"analysis {phase} error: {cause}")
        self.phase = phase
        self.cause = cause


__all__ = [
    "AnalysisPhaseError",
    "AnalyzerError",
    "ConfigError",
    "Phase",
    "QueueError",
    "QueueExhausted",
]

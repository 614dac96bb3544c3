"""Core data models shared across compdriver components."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple


class CancelledError(RuntimeError):
    """Raised by collaborators that observe a cancelled context."""


class Context:
    """Cancellation-carrying value passed unchanged to every collaborator."""

    def __init__(self, *, timeout: Optional[float] = None) -> None:
        self._event = threading.Event()
        self.deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self.deadline is not None and time.monotonic() >= self.deadline

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise CancelledError("context cancelled")


@dataclass(frozen=True)
class CompilationUnit:
    """Opaque description of one analysis task."""

    signature: str
    language: Optional[str] = None
    source_files: Tuple[str, ...] = ()
    arguments: Tuple[str, ...] = ()
    working_directory: Optional[str] = None
    details: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "CompilationUnit":
        signature = payload.get("signature")
        if not isinstance(signature, str) or not signature:
            raise ValueError("compilation unit requires a non-empty 'signature'")
        details = payload.get("details") or {}
        if not isinstance(details, Mapping):
            raise ValueError("compilation unit 'details' must be a mapping")
        working_directory = payload.get("working_directory")
        return cls(
            signature=signature,
            language=_as_optional_str(payload.get("language")),
            source_files=_as_str_tuple(payload.get("source_files")),
            arguments=_as_str_tuple(payload.get("arguments")),
            working_directory=str(working_directory) if working_directory else None,
            details=dict(details),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "signature": self.signature,
            "language": self.language,
            "source_files": list(self.source_files),
            "arguments": list(self.arguments),
            "working_directory": self.working_directory,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class AnalysisRequest:
    """A compilation unit plus driver-level configuration for one analyze call."""

    compilation: CompilationUnit
    file_data_service: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "compilation": self.compilation.to_dict(),
            "file_data_service": self.file_data_service,
        }


@dataclass(frozen=True)
class AnalysisOutput:
    """One result produced by an analyzer for a single compilation unit."""

    value: str
    source: str

    def to_dict(self) -> Dict[str, Any]:
        return {"source": self.source, "value": self.value}


def _as_optional_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_str_tuple(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)):
        return tuple(str(item) for item in value if isinstance(item, (str, int, float)))
    raise ValueError(f"expected a list of strings, got {type(value).__name__}")

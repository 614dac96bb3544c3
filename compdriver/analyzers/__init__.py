"""Analyzer plugin implementations and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Any, Callable, Dict, Iterable

from .base import Analyzer, OutputFunc
from .command import CommandAnalyzer
from .echo import EchoAnalyzer

_ENTRY_POINT_GROUP = "compdriver.analyzers"

_BUILTIN_FACTORIES: Dict[str, Callable[..., Analyzer]] = {
    "echo": EchoAnalyzer,
    "command": CommandAnalyzer,
}


def discover_analyzer(name: str, **options: Any) -> Analyzer:
    """Instantiate the analyzer registered under ``name``.

    Builtin analyzers take precedence over entry points in the
    ``compdriver.analyzers`` group. ``options`` are passed to the factory.
    """
    key = name.lower()
    factory = _BUILTIN_FACTORIES.get(key)
    if factory is not None:
        return _coerce_analyzer(factory, options)

    for entry in _iter_entry_points():
        if entry.name.lower() != key:
            continue
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover - depends on installed plugins
            raise RuntimeError(f"Failed to load analyzer entry point '{name}': {exc}") from exc
        return _coerce_analyzer(loaded, options)

    raise ValueError(f"Unknown analyzer requested: {name}")


def _coerce_analyzer(obj: object, options: Dict[str, Any]) -> Analyzer:
    if isinstance(obj, Analyzer):
        if options:
            raise TypeError("Analyzer instances registered as entry points take no options")
        return obj
    if callable(obj):
        instance = obj(**options)
        if isinstance(instance, Analyzer):
            return instance
    raise TypeError("Analyzer entry point must be an Analyzer subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points(group=_ENTRY_POINT_GROUP)


__all__ = [
    "Analyzer",
    "CommandAnalyzer",
    "EchoAnalyzer",
    "OutputFunc",
    "discover_analyzer",
]

"""Output sinks that consume analysis outputs as they are emitted."""

from __future__ import annotations

import json
from typing import List, TextIO

from .models import AnalysisOutput, Context


class CollectingSink:
    """Keeps every emitted output in memory."""

    def __init__(self) -> None:
        self.outputs: List[AnalysisOutput] = []

    def __call__(self, ctx: Context, item: AnalysisOutput) -> None:
        self.outputs.append(item)


class JSONLinesSink:
    """Writes each output to ``stream`` as one JSON object per line."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self.count = 0

    def __call__(self, ctx: Context, item: AnalysisOutput) -> None:
        self._stream.write(json.dumps(item.to_dict(), sort_keys=True))
        self._stream.write("\n")
        self._stream.flush()
        self.count += 1


__all__ = ["CollectingSink", "JSONLinesSink"]

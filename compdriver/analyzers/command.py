"""Analyzer adapter around an external indexer executable."""

from __future__ import annotations

import json
import subprocess
import time
from typing import Callable, Optional, Sequence

from .base import Analyzer, OutputFunc
from ..errors import AnalyzerError
from ..models import AnalysisOutput, AnalysisRequest, Context

CommandRunner = Callable[..., "subprocess.CompletedProcess[str]"]


class CommandAnalyzer(Analyzer):
    """Runs a command per compilation and emits each non-empty stdout line as an output.

    The analysis request is written to the command's stdin as a single JSON
    document. A non-zero exit status fails the compilation.
    """

    def __init__(
        self,
        command: Sequence[str],
        *,
        timeout: Optional[float] = None,
        runner: CommandRunner | None = None,
    ) -> None:
        if not command:
            raise ValueError("CommandAnalyzer requires a non-empty command")
        self.command = list(command)
        self.timeout = timeout
        self._runner = runner or subprocess.run

    def analyze(self, ctx: Context, request: AnalysisRequest, output: OutputFunc) -> None:
        ctx.raise_if_cancelled()
        unit = request.compilation
        payload = json.dumps(request.to_dict())
        try:
            completed = self._runner(
                self.command,
                input=payload,
                capture_output=True,
                text=True,
                cwd=unit.working_directory,
                timeout=self._effective_timeout(ctx),
            )
        except FileNotFoundError as exc:
            raise AnalyzerError(f"Unable to locate '{self.command[0]}'") from exc
        except subprocess.TimeoutExpired as exc:
            raise AnalyzerError(
                f"Analyzer command timed out after {exc.timeout}s for {unit.signature}"
            ) from exc

        if completed.returncode != 0:
            stderr = (completed.stderr or "").strip()
            raise AnalyzerError(
                f"Analyzer command failed with exit code {completed.returncode} "
                f"for {unit.signature}: {stderr}"
            )

        for line in (completed.stdout or "").splitlines():
            line = line.strip()
            if line:
                output(ctx, AnalysisOutput(value=line, source=unit.signature))

    def _effective_timeout(self, ctx: Context) -> Optional[float]:
        if ctx.deadline is None:
            return self.timeout
        remaining = max(ctx.deadline - time.monotonic(), 0.0)
        if self.timeout is None:
            return remaining
        return min(self.timeout, remaining)

"""FastAPI application entrypoint for compdriver service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..analyzers import Analyzer, discover_analyzer
from ..driver import Driver
from ..errors import AnalysisPhaseError, QueueError
from ..models import CompilationUnit, Context
from ..outputs import CollectingSink
from ..queues import LenientQueue, ListQueue, Queue


class UnitPayload(BaseModel):
    signature: str
    language: Optional[str] = None
    source_files: List[str] = Field(default_factory=list)
    arguments: List[str] = Field(default_factory=list)
    working_directory: Optional[str] = None
    details: Dict[str, Any] = Field(default_factory=dict)


class RunRequest(BaseModel):
    units: List[UnitPayload]
    file_data_service: str = ""
    analyzer: str = "echo"
    command: List[str] = Field(default_factory=list)
    keep_going: bool = False
    timeout: Optional[float] = None


class OutputPayload(BaseModel):
    source: str
    value: str


class FailurePayload(BaseModel):
    signature: str
    error: str


class RunResponse(BaseModel):
    status: str
    units: int
    outputs: List[OutputPayload]
    failures: List[FailurePayload] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str


AnalyzerFactory = Callable[..., Analyzer]


def create_app(analyzer_factory: AnalyzerFactory = discover_analyzer) -> FastAPI:
    """Create the FastAPI application exposing driver runs."""

    app = FastAPI(title="compdriver service", version="1.0.0")

    async def get_analyzer_factory() -> AnalyzerFactory:
        return analyzer_factory

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/run", response_model=RunResponse)
    async def run_units(
        payload: RunRequest,
        factory: AnalyzerFactory = Depends(get_analyzer_factory),
    ) -> RunResponse:
        units = [CompilationUnit.from_dict(unit.model_dump()) for unit in payload.units]
        options: Dict[str, Any] = {"command": payload.command} if payload.command else {}
        try:
            analyzer = factory(payload.analyzer, **options)
        except TypeError as exc:
            raise ValueError(f"Cannot build analyzer '{payload.analyzer}': {exc}") from exc
        sink = CollectingSink()
        queue: Queue = ListQueue(units)
        lenient: Optional[LenientQueue] = None
        if payload.keep_going:
            lenient = LenientQueue(queue)
            queue = lenient
        driver = Driver(
            analyzer,
            queue,
            sink,
            file_data_service=payload.file_data_service,
        )

        # The driver blocks for the whole run, so keep it off the event loop.
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, driver.run, Context(timeout=payload.timeout))

        failures = lenient.failures if lenient else []
        return RunResponse(
            status="partial" if failures else "ok",
            units=driver.stats.units,
            outputs=[OutputPayload(**item.to_dict()) for item in sink.outputs],
            failures=[
                FailurePayload(signature=failure.signature, error=str(failure.error))
                for failure in failures
            ],
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(_: Any, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(AnalysisPhaseError)
    async def phase_error_handler(_: Any, exc: AnalysisPhaseError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc), "phase": exc.phase})

    @app.exception_handler(QueueError)
    async def queue_error_handler(_: Any, exc: QueueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(_: Any, exc: RuntimeError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)

"""FastAPI application entrypoint for diranalyzer service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TypeVar

from fastapi import Depends, FastAPI, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import AnalyzerSettings, load_config
from ..errors import (
    AnalysisError,
    DirectoryNotFound,
    DirectoryValidationError,
    FileReadFailure,
)
from ..models import AnalysisResult, DirectoryRecord
from ..orchestrator import Orchestrator
from ..stores import DirectoryStore, JsonDirectoryStore

T = TypeVar("T")


class HealthResponse(BaseModel):
    status: str


class DirectoryCreateRequest(BaseModel):
    name: Optional[str] = None


class DirectoryResponse(BaseModel):
    id: int
    name: str
    inserted_at: str


class EvaluateRequest(BaseModel):
    name: str


class RankedWord(BaseModel):
    word: str
    count: int


class AnalysisResponse(BaseModel):
    name: str
    word_count: int
    file_count: int
    top_words: List[RankedWord]


def _directory_response(record: DirectoryRecord) -> DirectoryResponse:
    return DirectoryResponse(**record.to_dict())


def _analysis_response(result: AnalysisResult) -> AnalysisResponse:
    return AnalysisResponse(**result.to_dict())


async def _run_blocking(func: Callable[[], T]) -> T:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, func)


def create_app(
    orchestrator_factory: Optional[Callable[[], Orchestrator]] = None,
    store_factory: Optional[Callable[[], DirectoryStore]] = None,
) -> FastAPI:
    """Create the FastAPI application exposing directory analysis operations."""

    if orchestrator_factory is None or store_factory is None:
        settings = load_config(Path.cwd())
        orchestrator_factory = orchestrator_factory or _orchestrator_factory_for(settings)
        store_factory = store_factory or _store_factory_for(settings)
    make_orchestrator = orchestrator_factory
    make_store = store_factory

    app = FastAPI(title="Directory Analyzer Service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        # Fresh per request; analyses share no state.
        return make_orchestrator()

    async def get_store() -> DirectoryStore:
        return make_store()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/directories", response_model=List[DirectoryResponse])
    async def list_directories(
        store: DirectoryStore = Depends(get_store),
    ) -> List[DirectoryResponse]:
        records = await _run_blocking(store.list)
        return [_directory_response(record) for record in records]

    @app.post("/directories", response_model=DirectoryResponse, status_code=201)
    async def create_directory(
        payload: DirectoryCreateRequest,
        store: DirectoryStore = Depends(get_store),
    ) -> DirectoryResponse:
        attrs = payload.model_dump()
        record = await _run_blocking(lambda: store.create(attrs))
        return _directory_response(record)

    @app.get("/directories/{record_id}", response_model=DirectoryResponse)
    async def show_directory(
        record_id: int,
        store: DirectoryStore = Depends(get_store),
    ) -> DirectoryResponse:
        record = await _run_blocking(lambda: store.get_or_fail(record_id))
        return _directory_response(record)

    @app.delete("/directories/{record_id}", status_code=204)
    async def delete_directory(
        record_id: int,
        store: DirectoryStore = Depends(get_store),
    ) -> Response:
        await _run_blocking(lambda: store.delete(store.get_or_fail(record_id)))
        return Response(status_code=204)

    @app.get("/directories/{record_id}/evaluate", response_model=AnalysisResponse)
    async def evaluate_registered(
        record_id: int,
        store: DirectoryStore = Depends(get_store),
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> AnalysisResponse:
        record = await _run_blocking(lambda: store.get_or_fail(record_id))
        result = await _run_blocking(lambda: orchestrator.analyze(record.name))
        return _analysis_response(result)

    @app.post("/evaluate", response_model=AnalysisResponse)
    async def evaluate(
        payload: EvaluateRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> AnalysisResponse:
        result = await _run_blocking(lambda: orchestrator.analyze(payload.name))
        return _analysis_response(result)

    @app.exception_handler(DirectoryNotFound)
    async def not_found_handler(_: Any, exc: DirectoryNotFound) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(DirectoryValidationError)
    async def validation_handler(_: Any, exc: DirectoryValidationError) -> JSONResponse:
        content: Dict[str, Any] = {"detail": str(exc), "errors": exc.errors}
        return JSONResponse(status_code=422, content=content)

    @app.exception_handler(AnalysisError)
    async def analysis_error_handler(_: Any, exc: AnalysisError) -> JSONResponse:
        status_code = 500 if isinstance(exc, FileReadFailure) else 422
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    return app


def run_service(
    settings: AnalyzerSettings, host: Optional[str] = None, port: Optional[int] = None
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app(_orchestrator_factory_for(settings), _store_factory_for(settings))
    uvicorn.run(
        app,
        host=host or settings.service.host,
        port=port or settings.service.port,
    )


def _orchestrator_factory_for(settings: AnalyzerSettings) -> Callable[[], Orchestrator]:
    return lambda: Orchestrator.from_settings(settings)


def _store_factory_for(settings: AnalyzerSettings) -> Callable[[], DirectoryStore]:
    store = JsonDirectoryStore(settings.store.path)
    return lambda: store

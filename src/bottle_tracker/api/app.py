"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, File, Query, Request, UploadFile, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bottle_tracker.app_logging import configure_logging
from bottle_tracker.config import parse_allowed_origins
from bottle_tracker.containers import AppContainer
from bottle_tracker.domain.errors import (
    AnalysisError,
    DataFileNotFoundError,
    InvalidUploadError,
    UploadTooLargeError,
)
from bottle_tracker.payloads import analysis_payload, metadata_payload

_PAYLOAD_TOO_LARGE = 413


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(container.settings.cors_allowed_origins),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(AnalysisError)
    async def analysis_error_handler(
        request: Request, exc: AnalysisError
    ) -> JSONResponse:
        logger.warning("Feeding log analysis failed: %s", exc)
        return _error_response(
            status.HTTP_400_BAD_REQUEST, "Failed to analyze CSV", exc
        )

    @app.exception_handler(DataFileNotFoundError)
    async def not_found_handler(
        request: Request, exc: DataFileNotFoundError
    ) -> JSONResponse:
        logger.warning("Feeding log missing: %s", exc.file_name)
        return _error_response(
            status.HTTP_404_NOT_FOUND, "CSV file not found in storage", exc
        )

    @app.exception_handler(InvalidUploadError)
    async def upload_error_handler(
        request: Request, exc: InvalidUploadError
    ) -> JSONResponse:
        status_code = (
            _PAYLOAD_TOO_LARGE
            if isinstance(exc, UploadTooLargeError)
            else status.HTTP_400_BAD_REQUEST
        )
        return _error_response(status_code, "Upload rejected", exc)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/test")
    async def self_test() -> dict[str, object]:
        """Report that the service is reachable."""
        return {
            "success": True,
            "message": "Service is functioning correctly",
            "timestamp": datetime.now(tz=UTC).isoformat(),
        }

    @app.get("/data")
    async def feeding_data(
        request: Request,
        weight: float | None = Query(default=None, gt=0, le=30),
    ) -> dict[str, object]:
        """Return the statistical summary of the stored feeding log."""
        state_container: AppContainer = request.app.state.container
        result = state_container.analysis_service.analyze(baby_weight_kg=weight)
        return analysis_payload(result)

    @app.get("/data/filemeta")
    async def feeding_file_metadata(request: Request) -> dict[str, object]:
        """Return size and modification time of the stored feeding log."""
        state_container: AppContainer = request.app.state.container
        metadata = state_container.analysis_service.file_metadata()
        return metadata_payload(metadata)

    @app.get("/insights")
    async def feeding_insights(request: Request) -> dict[str, object]:
        """Return generated prose insights for the stored feeding log."""
        state_container: AppContainer = request.app.state.container
        result = state_container.analysis_service.analyze()
        insights = await state_container.insights_service.generate(result)
        return insights.model_dump(mode="json", by_alias=True, exclude_none=True)

    @app.post("/upload")
    async def upload_feeding_log(
        request: Request, file: UploadFile = File(...)
    ) -> dict[str, object]:
        """Replace the stored feeding log with an uploaded CSV export."""
        state_container: AppContainer = request.app.state.container
        content = await file.read(state_container.upload_service.max_bytes + 1)
        size = state_container.upload_service.store(content)
        logger.info("Accepted upload %s", file.filename)
        return {
            "success": True,
            "fileName": state_container.upload_service.file_name,
            "size": size,
        }

    return app


def _error_response(status_code: int, error: str, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "details": str(exc)},
    )

"""
Global exception handlers and request timing. Map domain exceptions to the
error envelope: {"success": false, "statusCode", "error", "executionTime"}.
"""
import time

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from interview_api.errors import InterviewServiceError
from interview_api.utils.logger import get_logger

logger = get_logger(__name__)


def elapsed_ms(request: Request) -> int:
    started = getattr(request.state, "started_at", None)
    if started is None:
        return 0
    return int((time.monotonic() - started) * 1000)


def error_response(request: Request, status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "statusCode": status_code,
            "error": message,
            "executionTime": elapsed_ms(request),
            **extra,
        },
    )


def register_timing_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def record_start_time(request: Request, call_next):
        request.state.started_at = time.monotonic()
        return await call_next(request)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(InterviewServiceError)
    async def service_error_handler(
        request: Request, exc: InterviewServiceError
    ) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{type(exc).__name__}: {exc}")
        else:
            logger.info(f"{type(exc).__name__}: {exc}")
        return error_response(request, exc.status_code, exc.message, **exc.payload())

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
        return error_response(request, status.HTTP_404_NOT_FOUND, "Resource not found")

    @app.exception_handler(Exception)
    async def server_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return error_response(
            request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
        )

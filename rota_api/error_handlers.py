"""Global exception handlers: everything leaves the API as the uniform envelope.

- HTTPException (auth, 404 routes) → {status, error: detail, payload: null}
- RequestValidationError → 400 with the first field problem
- Exception (catch-all) → 500, internal details stay in the logs
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def envelope(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": status_code, "error": error, "payload": None},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        logger.warning(f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}")
        return envelope(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.warning(f"Validation error on {request.url.path}: {errors}")
        if errors:
            first = errors[0]
            field = ".".join(str(loc) for loc in first.get("loc", ()) if loc != "body")
            message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
        else:
            message = "Invalid request data"
        return envelope(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred")

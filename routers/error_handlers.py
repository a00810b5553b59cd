"""Error Handlers — render every failure into the API error envelope.

    PromotionError          -> its own status and code
    RequestValidationError  -> 400 ValidationError with field details
    HTTPException           -> its status, detail as message
    Exception (catch-all)   -> 500, internal details never leak
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.errors import PromotionError, AuthError

logger = logging.getLogger(__name__)


def _envelope(status_code: int, code: str, message: str, **extra) -> dict:
    error = {"code": code, "message": message}
    error.update(extra)
    return {"status": status_code, "error": error}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(PromotionError)
    async def promotion_error_handler(request: Request, exc: PromotionError):
        if exc.http_status >= 500:
            logger.error(f"{exc.code} on {request.url.path}: {exc.message}")
        else:
            logger.info(f"{exc.code} on {request.url.path}: {exc.message}")
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
        return JSONResponse(status_code=exc.http_status, content=exc.to_response(), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
        details = [
            {"field": ".".join(str(p) for p in err.get("loc", ())[1:]), "message": err.get("msg")}
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_envelope(400, "ValidationError", "Invalid request", details=details),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_envelope(exc.status_code, "HTTPError", str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_envelope(500, "InternalError", "An unexpected error occurred"),
        )

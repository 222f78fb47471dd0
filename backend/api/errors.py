"""
Exception handlers.

Every error leaves the API as {"error", "message", "details"}; unexpected
exceptions are logged and answered without internals.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shared.exceptions import NottaError

from .models.errors import INTERNAL_ERROR, ErrorResponse

logger = logging.getLogger(__name__)


async def notta_error_handler(request: Request, exc: NottaError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies and parameters answer 400."""
    fields = [
        {"field": ".".join(str(part) for part in err.get("loc", ())), "message": err.get("msg", "")}
        for err in exc.errors()
    ]
    body = ErrorResponse(
        error="VALIDATION_ERROR",
        message="Invalid request",
        details={"fields": fields},
    )
    return JSONResponse(status_code=400, content=body.model_dump())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content=INTERNAL_ERROR.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NottaError, notta_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

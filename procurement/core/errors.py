# procurement/core/errors.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from procurement.schemas.envelope import ErrorEnvelope

logger = logging.getLogger(__name__)


def error_body(message: str) -> dict:
    return ErrorEnvelope(error=message).model_dump()


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    first = errors[0]
    loc = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path"))
    msg = first.get("msg", "invalid value")
    if loc:
        return f"Invalid request: {loc}: {msg}"
    return f"Invalid request: {msg}"


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _validation_message(exc)
    logger.info(
        "[validation] %s %s: %s",
        request.method,
        request.url.path,
        message,
        extra={"request_id": getattr(request.state, "request_id", None)},
    )
    return JSONResponse(status_code=400, content=error_body(message))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "[error] unhandled exception on %s %s",
        request.method,
        request.url.path,
        extra={"request_id": getattr(request.state, "request_id", None)},
    )
    return JSONResponse(status_code=500, content=error_body("Internal server error."))


def register_exception_handlers(app: FastAPI) -> None:
    """
    Every failure leaves the API as {success: false, error: <message>}.
    """
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

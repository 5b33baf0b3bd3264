"""Domain error -> HTTP status mapping.

Registered on the app so routers can let domain errors propagate; the
session dependency still sees the exception and rolls back first.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from zawia.models.errors import (
    AlreadyMemberError,
    ExternalServiceError,
    InvalidTokenError,
    NotAMemberError,
    ProfileNotFoundError,
    SpaceNotFoundError,
    StoreError,
    ValidationError,
    WorkspaceFullError,
    ZawiaError,
)

logger: structlog.stdlib.BoundLogger = structlog.get_logger()

STATUS_BY_ERROR: dict[type[ZawiaError], int] = {
    ValidationError: 422,
    InvalidTokenError: 404,
    SpaceNotFoundError: 404,
    ProfileNotFoundError: 404,
    NotAMemberError: 403,
    WorkspaceFullError: 409,
    AlreadyMemberError: 409,
    StoreError: 503,
    ExternalServiceError: 502,
}


def status_for(exc: ZawiaError) -> int:
    """Most specific mapped status along the exception's MRO."""
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return 500


async def zawia_error_handler(request: Request, exc: ZawiaError) -> JSONResponse:
    status = status_for(exc)
    log = logger.error if status >= 500 else logger.info
    log(
        "request_rejected",
        path=request.url.path,
        error=type(exc).__name__,
        status=status,
    )
    return JSONResponse(
        status_code=status,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


async def pydantic_error_handler(
    request: Request, exc: PydanticValidationError,
) -> JSONResponse:
    """Model validation failures raised inside handlers (compass edits)."""
    logger.info("request_rejected", path=request.url.path, error="ValidationError", status=422)
    return JSONResponse(
        status_code=422,
        content={
            "detail": [
                {"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]}
                for e in exc.errors()
            ],
            "error": "ValidationError",
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ZawiaError, zawia_error_handler)
    app.add_exception_handler(PydanticValidationError, pydantic_error_handler)

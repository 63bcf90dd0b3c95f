"""Exception handlers that turn domain errors into JSON responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from lms.core.errors import InternalError, LMSError, ValidationError

logger = logging.getLogger(__name__)


def _error_body(exc: LMSError) -> dict[str, str]:
    return {"detail": exc.message, "code": exc.code}


async def lms_error_handler(request: Request, exc: LMSError) -> JSONResponse:
    """Map an LMSError to its status code with {detail, code}."""
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc),
        headers=headers,
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Body/param shape errors use the same shape as service-level ValidationError."""
    body = _error_body(ValidationError("Invalid request"))
    body["errors"] = jsonable_encoder(exc.errors())
    return JSONResponse(status_code=ValidationError.status_code, content=body)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Unexpected store failure: log it, answer 500 without internals."""
    logger.exception(
        "Database error on %s %s: %s", request.method, request.url.path, exc
    )
    err = InternalError("Internal server error")
    return JSONResponse(status_code=err.status_code, content=_error_body(err))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LMSError, lms_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)

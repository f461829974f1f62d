"""
Exception handlers that turn every failure into a {"message": ...} response
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from workshop_mgmt.errors import WorkshopDomainError

logger = logging.getLogger(__name__)


def validation_message(exc: RequestValidationError) -> str:
    """Summarise request validation errors in one sentence"""
    errors = exc.errors()
    missing = [
        str(err["loc"][-1])
        for err in errors
        if err.get("type") == "missing" and len(err.get("loc", ())) > 1
    ]
    if missing:
        return f"Missing required fields: {', '.join(missing)}."

    for err in errors:
        loc = err.get("loc", ())
        if loc == ("body",):
            return "Request body is required and must be a JSON object."
        field = loc[-1] if loc else "request"
        return f"Invalid value for {field}: {err.get('msg', 'invalid input')}."

    return "Invalid request."


async def domain_error_handler(request: Request, exc: WorkshopDomainError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError):
    message = validation_message(exc)
    logger.warning(f"{request.method} {request.url.path} rejected: {message}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error in {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error."},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WorkshopDomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

"""Exception handlers that shape every error body."""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

logger = structlog.get_logger()


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Domain errors: ``{"message": ...}`` with the raised status."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request", "errors": jsonable_encoder(exc.errors())}
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Database failures: HTTP 500 carrying the driver's message."""
    orig = getattr(exc, "orig", None)
    message = str(orig) if orig is not None else str(exc)
    logger.error(
        "Database error",
        method=request.method,
        path=request.url.path,
        error=message
    )
    return JSONResponse(status_code=500, content={"error": message})


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)

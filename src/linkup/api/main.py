"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from linkup import __version__
from linkup.api.routes import (
    creators_router,
    posts_router,
    sub_requests_router,
    subscribers_router,
    users_router,
)
from linkup.errors import LinkUpError, StoreError, ValidationError

logger = logging.getLogger(__name__)

app = FastAPI(
    title="LinkUp",
    description="Creator and subscriber content platform API",
    version=__version__,
)


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
    )


@app.exception_handler(LinkUpError)
async def linkup_error_handler(request: Request, exc: LinkUpError) -> JSONResponse:
    """Render domain errors with their status and code."""
    if exc.status_code >= 500:
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc
        )
    return error_response(exc.status_code, exc.code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed input as a 400 validation error."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return error_response(
        status.HTTP_400_BAD_REQUEST, ValidationError.code, "; ".join(messages) or "Invalid input"
    )


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Hide database failures behind a generic server error."""
    logger.exception("Database error during %s %s", request.method, request.url.path)
    error = StoreError()
    return error_response(error.status_code, error.code, error.message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Keep framework errors (unknown route, wrong method) in the same shape."""
    codes = {
        status.HTTP_404_NOT_FOUND: "not_found",
        status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    }
    return error_response(exc.status_code, codes.get(exc.status_code, "http_error"), str(exc.detail))


# Include routers
for router in (
    users_router,
    creators_router,
    posts_router,
    sub_requests_router,
    subscribers_router,
):
    app.include_router(router, prefix="/api")


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}

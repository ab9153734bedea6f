"""HTTP error mapping.

Domain exceptions become ``{"error": message}`` bodies. Anything else is
logged and reported as a generic 500 so internals never reach the client.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from gumboard.core.exceptions import AccessDeniedError

logger = structlog.get_logger()


async def access_denied_handler(request: Request, exc: AccessDeniedError) -> JSONResponse:
    """Map an AccessDeniedError to its status code."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures and return a generic 500."""
    logger.exception(
        "unhandled_error",
        method=request.method,
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error handlers on an application."""
    app.add_exception_handler(AccessDeniedError, access_denied_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)

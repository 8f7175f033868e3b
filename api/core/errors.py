"""
Application-wide exception handlers.

Expected failures are raised as `fastapi.HTTPException` by feature code and
rendered by FastAPI itself. Anything else ends up here; it has already been
logged with the request context by `RequestContextMiddleware`.
"""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


async def unhandled_exception_handler(_: Request, __: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error."},
    )


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(Exception, unhandled_exception_handler)

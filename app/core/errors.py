"""
=============================================================================
CERTIFICADOS - ERROR HANDLING MODULE
=============================================================================
Domain exceptions and the global exception handler.

Every failure below the route layer (record store, template, PDF engine,
artifact store) propagates untouched to the handler registered here, which:
- Logs full stack trace server-side
- Returns a generic 500 body to the client
- Adds the exception type and message only when DEBUG is on

Usage:
    # In main.py
    from app.core.errors import register_exception_handlers
    register_exception_handlers(app)
=============================================================================
"""

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.core.config import settings

logger = logging.getLogger(__name__)


class CertificateError(Exception):
    """Error base del flujo de certificados."""

    pass


class TemplateRenderError(CertificateError):
    """La plantilla no pudo renderizarse."""

    pass


class DocumentComposeError(CertificateError):
    """El motor PDF no pudo componer el documento."""

    pass


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}:\n"
            f"{traceback.format_exc()}"
        )

        if settings.DEBUG:
            return JSONResponse(
                status_code=500,
                content={
                    "detail": "Internal Server Error",
                    "error_type": type(exc).__name__,
                    "message": str(exc),
                    "path": request.url.path,
                },
            )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal Server Error",
                "message": "An unexpected error occurred. Please try again later.",
            },
        )

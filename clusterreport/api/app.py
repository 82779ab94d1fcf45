"""FastAPI application factory for clusterreport.

Usage::

    from clusterreport.api.app import create_app

    app = create_app(service=service, config=config)

The factory is used by both ``clusterreport serve`` and unit tests.
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from clusterreport.api.routes import router
from clusterreport.api.schemas import ErrorResponse

_log = structlog.get_logger(component="api.app")

_API_PREFIX = "/api/v1"


def create_app(service: Any, config: Any = None) -> FastAPI:
    """Create and configure the clusterreport FastAPI application.

    Args:
        service: ReportService used to generate and deliver reports.
        config:  ClusterReportConfig.  Stored for route handlers.

    Returns:
        Configured FastAPI application, ready to be served by uvicorn.
    """
    from clusterreport import __version__

    app = FastAPI(
        title="clusterreport",
        summary="Failover cluster resource group status reports",
        version=__version__,
        docs_url="/api/v1/docs",
        redoc_url="/api/v1/redoc",
        openapi_url="/api/v1/openapi.json",
    )

    app.state.service = service
    app.state.config = config

    app.include_router(router, prefix=_API_PREFIX)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        _request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Map Pydantic validation errors to our error envelope."""
        errors = exc.errors()
        first_msg = str(errors[0].get("msg", "")) if errors else ""
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error="INVALID_REQUEST", detail=first_msg).model_dump(),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Catch-all for unhandled exceptions; never expose stack traces."""
        _log.error(
            "unhandled_exception",
            path=str(request.url.path),
            method=request.method,
            error=str(exc),
        )
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="INTERNAL_ERROR",
                detail="An unexpected error occurred.",
            ).model_dump(),
        )

    return app

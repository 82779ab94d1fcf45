"""REST API routes."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Query, Request, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from clusterreport.api.schemas import ErrorResponse, HealthResponse, ReportResponse
from clusterreport.errors import ReportGenerationError
from clusterreport.report.render import format_value, report_records

_log = structlog.get_logger(component="api.routes")

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    from clusterreport import __version__

    return HealthResponse(version=__version__)


@router.get(
    "/clusters/{cluster}/report",
    response_model=ReportResponse,
    responses={502: {"model": ErrorResponse}},
)
async def cluster_report(
    request: Request,
    cluster: str,
    detailed: bool = Query(False, description="One row per resource instead of per group"),
    deliver: bool = Query(False, description="Also send the report to configured delivery channels"),
) -> ReportResponse | JSONResponse:
    service = request.app.state.service
    try:
        report = await service.generate(cluster, detailed)
    except ReportGenerationError as exc:
        _log.warning("report_request_failed", cluster=cluster, error=str(exc))
        return JSONResponse(
            status_code=502,
            content=ErrorResponse(error="REPORT_GENERATION_FAILED", detail=str(exc)).model_dump(),
        )

    delivered = await service.deliver(report) if deliver else None
    return ReportResponse(
        cluster=report.cluster_name,
        detailed=report.detailed,
        generated_at=format_value(report.generated_at) if report.generated_at else None,
        columns=list(report.columns),
        rows=report_records(report),
        delivered=delivered,
    )


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

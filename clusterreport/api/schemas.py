"""Pydantic response schemas for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error envelope returned for every non-2xx response."""

    error: str
    detail: str


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str


class ReportResponse(BaseModel):
    """A generated report.  Row keys are the report's column headers."""

    cluster: str
    detailed: bool
    generated_at: str | None = None
    columns: list[str] = Field(default_factory=list)
    rows: list[dict[str, str]] = Field(default_factory=list)
    delivered: dict[str, bool] | None = None

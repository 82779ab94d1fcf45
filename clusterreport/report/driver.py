"""Report driver: generates one cluster's report, all or nothing.

Sequence: resolve cluster -> list nodes -> aggregate the four event
categories -> list resource groups -> assemble rows.  Node-level fetch
failures are absorbed by the event source adapter; any other failure aborts
the report and surfaces as ReportGenerationError.  Nothing is retried.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable
from datetime import UTC, datetime
from enum import StrEnum
from typing import TypeVar

import structlog

from clusterreport.collector import EventSource, aggregate_all
from clusterreport.correlation import DEFAULT_MATCHER, GroupMatcher
from clusterreport.errors import ReportGenerationError, TopologyFetchError
from clusterreport.models.report import Report, ReportRow
from clusterreport.models.topology import ClusterHandle, ResourceGroupView, ResourceView
from clusterreport.observability.metrics import report_duration_seconds, report_generations_total
from clusterreport.report.assembler import assemble
from clusterreport.topology.base import ClusterTopology

_log = structlog.get_logger(component="report.driver")

_T = TypeVar("_T")


class DriverState(StrEnum):
    """Lifecycle of a single report run."""

    IDLE = "idle"
    RUNNING = "running"
    OK = "ok"
    FAILED = "failed"


class ReportDriver:
    """Runs one report generation against a topology and an event source.

    A driver is single-use: ``run()`` may be awaited once.  ``source`` should
    be a TolerantEventSource so that unreachable nodes do not abort the run.
    """

    def __init__(
        self,
        topology: ClusterTopology,
        source: EventSource,
        matcher: GroupMatcher | None = None,
    ) -> None:
        self._topology = topology
        self._source = source
        self._matcher = matcher or DEFAULT_MATCHER
        self.state = DriverState.IDLE
        self.error: ReportGenerationError | None = None

    async def run(self, cluster_name: str, detailed: bool = False) -> list[ReportRow]:
        """Generate the report rows for *cluster_name*.

        Raises:
            ReportGenerationError: on any non-tolerated failure.  No rows
                are returned in that case.
            RuntimeError: if the driver has already run.
        """
        if self.state != DriverState.IDLE:
            raise RuntimeError(f"ReportDriver already used (state={self.state})")
        self.state = DriverState.RUNNING
        log = _log.bind(cluster=cluster_name, detailed=detailed)
        t_start = time.monotonic()

        try:
            rows = await self._generate(cluster_name, detailed)
        except asyncio.CancelledError:
            self.state = DriverState.FAILED
            report_generations_total.labels(outcome="cancelled").inc()
            log.warning("report_generation_cancelled")
            raise
        except Exception as exc:
            self.state = DriverState.FAILED
            self.error = ReportGenerationError(cluster_name, exc)
            report_generations_total.labels(outcome="failed").inc()
            log.error("report_generation_failed", error=str(exc), error_type=type(exc).__name__)
            raise self.error from exc

        duration = time.monotonic() - t_start
        self.state = DriverState.OK
        report_generations_total.labels(outcome="ok").inc()
        report_duration_seconds.observe(duration)
        log.info("report_generated", rows=len(rows), duration_ms=round(duration * 1000.0, 1))
        return rows

    async def _generate(self, cluster_name: str, detailed: bool) -> list[ReportRow]:
        # ClusterNotFound propagates as-is; it is a precondition, not a fetch error
        cluster = await self._topology.resolve_cluster(cluster_name)

        nodes = await _fetch(cluster, "list_nodes", self._topology.list_nodes(cluster))
        streams = await aggregate_all(self._source, nodes)
        groups = await _fetch(cluster, "list_resource_groups", self._topology.list_resource_groups(cluster))

        async def _list_resources(group: ResourceGroupView) -> list[ResourceView]:
            return await _fetch(cluster, "list_resources", self._topology.list_resources(cluster, group))

        return await assemble(
            cluster.name,
            groups,
            streams,
            detailed,
            _list_resources,
            self._matcher,
        )


async def _fetch(cluster: ClusterHandle, operation: str, call: Awaitable[_T]) -> _T:
    try:
        return await call
    except Exception as exc:
        raise TopologyFetchError(cluster.name, operation, exc) from exc


async def generate_report(
    cluster_name: str,
    detailed: bool = False,
    passthrough: bool = True,
    *,
    topology: ClusterTopology,
    source: EventSource,
    matcher: GroupMatcher | None = None,
) -> list[ReportRow] | None:
    """Generate a report and return its rows, or None when *passthrough* is off.

    The report is produced in full either way; *passthrough* only controls
    whether the rows are handed back.

    Raises:
        ReportGenerationError: if the report could not be produced.
    """
    rows = await ReportDriver(topology, source, matcher).run(cluster_name, detailed)
    return rows if passthrough else None


async def build_report(
    cluster_name: str,
    detailed: bool = False,
    *,
    topology: ClusterTopology,
    source: EventSource,
    matcher: GroupMatcher | None = None,
) -> Report:
    """Generate a report wrapped with its metadata for rendering and delivery."""
    rows = await ReportDriver(topology, source, matcher).run(cluster_name, detailed)
    return Report(
        cluster_name=cluster_name,
        detailed=detailed,
        rows=rows,
        generated_at=datetime.now(tz=UTC),
    )

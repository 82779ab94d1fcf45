"""Application wiring for clusterreport.

Builds the collaborators every entry point needs (topology, tolerant event
source, matcher, delivery dispatcher) from configuration, and runs the REST
API under uvicorn.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from clusterreport.collector import EventSource, TolerantEventSource
from clusterreport.correlation import GroupMatcher, build_matcher
from clusterreport.delivery import ReportDispatcher, build_report_dispatcher
from clusterreport.errors import SnapshotError
from clusterreport.models.config import ClusterReportConfig
from clusterreport.models.report import Report
from clusterreport.report import build_report
from clusterreport.topology import ClusterTopology, load_snapshot

_log = structlog.get_logger(component="app")


@dataclass
class ReportService:
    """Everything needed to produce and deliver reports for any cluster."""

    topology: ClusterTopology
    source: EventSource
    matcher: GroupMatcher
    dispatcher: ReportDispatcher

    async def generate(self, cluster_name: str, detailed: bool = False) -> Report:
        """Generate a report.  Raises ReportGenerationError on failure."""
        return await build_report(
            cluster_name,
            detailed,
            topology=self.topology,
            source=self.source,
            matcher=self.matcher,
        )

    async def deliver(self, report: Report) -> dict[str, bool]:
        return await self.dispatcher.deliver(report)


def build_service(
    config: ClusterReportConfig,
    topology: ClusterTopology | None = None,
    source: EventSource | None = None,
) -> ReportService:
    """Wire a ReportService.

    When *topology* and *source* are not supplied they are loaded from
    ``config.collector.snapshot_path``.  The event source is always wrapped
    in a TolerantEventSource with the configured per-node timeout.

    Raises:
        SnapshotError: if no collaborators are given and no snapshot is configured.
        ValueError:    if the configured match strategy is unknown.
    """
    if topology is None or source is None:
        if not config.collector.snapshot_path:
            raise SnapshotError("no snapshot configured (set CLUSTERREPORT_SNAPSHOT_PATH or pass --snapshot)")
        snap_topology, snap_source = load_snapshot(config.collector.snapshot_path)
        topology = topology or snap_topology
        source = source or snap_source

    service = ReportService(
        topology=topology,
        source=TolerantEventSource(source, timeout=config.collector.node_fetch_timeout),
        matcher=build_matcher(config.match.strategy, config.match.ignore_case),
        dispatcher=build_report_dispatcher(config.delivery),
    )
    _log.debug(
        "report_service_built",
        matcher=repr(service.matcher),
        node_fetch_timeout=config.collector.node_fetch_timeout,
        channels=[c.channel_name for c in service.dispatcher.channels],
    )
    return service


async def serve(config: ClusterReportConfig, service: ReportService) -> None:
    """Run the REST API until uvicorn is asked to stop."""
    import uvicorn

    from clusterreport.api import build_app

    fastapi_app = build_app(service=service, config=config)
    uv_config = uvicorn.Config(
        app=fastapi_app,
        host="0.0.0.0",
        port=config.api.port,
        log_config=None,  # structlog handles all logging
        access_log=False,
    )
    server = uvicorn.Server(uv_config)
    _log.info("rest_api_starting", port=config.api.port)
    await server.serve()
    _log.info("rest_api_stopped")

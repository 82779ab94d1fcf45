"""Exception hierarchy for clusterreport.

Only ``NodeUnreachable`` is tolerated (inside the event source adapter).
Every other error reaching the report driver aborts the whole report and is
re-raised to the caller as ``ReportGenerationError``.
"""

from __future__ import annotations


class ClusterReportError(Exception):
    """Base class for all clusterreport errors."""


class ClusterNotFound(ClusterReportError):
    """Raised by a topology collaborator when a cluster cannot be resolved."""

    def __init__(self, cluster: str) -> None:
        super().__init__(f"Cluster '{cluster}' not found")
        self.cluster = cluster


class TopologyFetchError(ClusterReportError):
    """Raised when nodes, groups or resources of a cluster cannot be listed."""

    def __init__(self, cluster: str, operation: str, cause: BaseException) -> None:
        super().__init__(f"{operation} failed for cluster '{cluster}': {cause}")
        self.cluster = cluster
        self.operation = operation
        self.cause = cause


class NodeUnreachable(ClusterReportError):
    """Raised by an event source when a node's event log cannot be read."""

    def __init__(self, node: str, reason: str = "") -> None:
        detail = f": {reason}" if reason else ""
        super().__init__(f"Node '{node}' unreachable{detail}")
        self.node = node
        self.reason = reason


class ReportGenerationError(ClusterReportError):
    """Surfaced to callers when a report could not be produced."""

    def __init__(self, cluster: str, cause: BaseException) -> None:
        super().__init__(f"Failed to generate report for cluster '{cluster}': {cause}")
        self.cluster = cluster
        self.cause = cause


class SnapshotError(ClusterReportError):
    """Raised when a snapshot file is missing or malformed."""

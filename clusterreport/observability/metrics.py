"""Prometheus metrics for clusterreport.

All collectors live in the default registry and are exposed by the REST API
at ``/api/v1/metrics``.
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

report_generations_total = Counter(
    "clusterreport_report_generations_total",
    "Report generations by outcome",
    ["outcome"],  # ok | failed | cancelled
)

report_duration_seconds = Histogram(
    "clusterreport_report_duration_seconds",
    "Wall-clock time to generate one report",
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0),
)

node_fetch_failures_total = Counter(
    "clusterreport_node_fetch_failures_total",
    "Per-node event fetches that were tolerated as empty",
    ["reason"],  # unreachable | timeout | error
)

report_deliveries_total = Counter(
    "clusterreport_report_deliveries_total",
    "Report delivery attempts by channel and result",
    ["channel", "success"],
)

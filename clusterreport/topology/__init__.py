"""Cluster topology collaborators.

Exposes:
    ClusterTopology     -- Protocol the report driver consumes.
    SnapshotTopology    -- Topology read from a JSON snapshot file.
    SnapshotEventSource -- Node event logs read from the same file.
    load_snapshot       -- Parse a snapshot file into both.
"""

from clusterreport.topology.base import ClusterTopology
from clusterreport.topology.snapshot import (
    SnapshotEventSource,
    SnapshotTopology,
    load_snapshot,
    parse_snapshot,
)

__all__ = [
    "ClusterTopology",
    "SnapshotEventSource",
    "SnapshotTopology",
    "load_snapshot",
    "parse_snapshot",
]

"""Snapshot-backed topology and event source.

A snapshot is a JSON document captured from a cluster (or written by hand for
tests and demos)::

    {
      "clusters": [
        {"name": "C1", "nodes": ["N1", "N2"],
         "groups": [{"name": "G1", "owner_node": "N1", "state": "Online",
                     "resources": [{"name": "IP Address", "state": "Online"}]}]}
      ],
      "events": {
        "N1": [{"log": "System", "event_id": 1069,
                "timestamp": "2026-01-01T10:00:00Z", "message": "..."}]
      }
    }

A node listed in a cluster but missing from ``events`` could not be read when
the snapshot was taken and is reported as unreachable.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import structlog

from clusterreport.errors import ClusterNotFound, NodeUnreachable, SnapshotError
from clusterreport.models.events import EventRecord
from clusterreport.models.topology import ClusterHandle, NodeRef, ResourceGroupView, ResourceView

_log = structlog.get_logger(component="topology.snapshot")


@dataclass
class _ClusterEntry:
    nodes: list[NodeRef] = field(default_factory=list)
    groups: list[ResourceGroupView] = field(default_factory=list)
    resources: dict[str, list[ResourceView]] = field(default_factory=dict)


class SnapshotTopology:
    """ClusterTopology backed by the ``clusters`` section of a snapshot."""

    def __init__(self, clusters: dict[str, _ClusterEntry]) -> None:
        self._clusters = clusters

    async def resolve_cluster(self, name: str) -> ClusterHandle:
        if name not in self._clusters:
            raise ClusterNotFound(name)
        return ClusterHandle(name=name)

    async def list_nodes(self, cluster: ClusterHandle) -> list[NodeRef]:
        return list(self._entry(cluster).nodes)

    async def list_resource_groups(self, cluster: ClusterHandle) -> list[ResourceGroupView]:
        return list(self._entry(cluster).groups)

    async def list_resources(self, cluster: ClusterHandle, group: ResourceGroupView) -> list[ResourceView]:
        return list(self._entry(cluster).resources.get(group.name, []))

    @property
    def cluster_names(self) -> list[str]:
        return list(self._clusters)

    def _entry(self, cluster: ClusterHandle) -> _ClusterEntry:
        try:
            return self._clusters[cluster.name]
        except KeyError:
            raise ClusterNotFound(cluster.name) from None


class SnapshotEventSource:
    """EventSource backed by the ``events`` section of a snapshot."""

    def __init__(self, events: dict[str, list[tuple[str, int, EventRecord]]]) -> None:
        self._events = events

    async def fetch_events(self, node: str, log_name: str, event_id: int) -> list[EventRecord]:
        if node not in self._events:
            raise NodeUnreachable(node, "no event log captured in snapshot")
        return [record for log, eid, record in self._events[node] if log == log_name and eid == event_id]


def _parse_timestamp(value: Any, where: str) -> datetime:
    if not isinstance(value, str):
        raise SnapshotError(f"{where}: timestamp must be an ISO-8601 string, got {value!r}")
    try:
        ts = datetime.fromisoformat(value)
    except ValueError as exc:
        raise SnapshotError(f"{where}: invalid timestamp {value!r}") from exc
    # Naive timestamps are treated as UTC
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts


def _require(obj: dict[str, Any], key: str, where: str) -> Any:
    if key not in obj:
        raise SnapshotError(f"{where}: missing required key '{key}'")
    return obj[key]


def _parse_cluster(raw: dict[str, Any], index: int) -> tuple[str, _ClusterEntry]:
    where = f"clusters[{index}]"
    name = str(_require(raw, "name", where))
    entry = _ClusterEntry(nodes=[NodeRef(name=str(n)) for n in raw.get("nodes", [])])
    for g_index, group in enumerate(raw.get("groups", [])):
        g_where = f"{where}.groups[{g_index}]"
        view = ResourceGroupView(
            name=str(_require(group, "name", g_where)),
            owner_node=str(group.get("owner_node", "")),
            state=str(group.get("state", "Unknown")),
        )
        if view.name in entry.resources:
            raise SnapshotError(f"{g_where}: duplicate resource group '{view.name}' in cluster '{name}'")
        entry.groups.append(view)
        entry.resources[view.name] = [
            ResourceView(
                name=str(_require(res, "name", f"{g_where}.resources[{r_index}]")),
                owner_group=view.name,
                owner_node=str(res.get("owner_node", view.owner_node)),
                state=str(res.get("state", "Unknown")),
            )
            for r_index, res in enumerate(group.get("resources", []))
        ]
    return name, entry


def _parse_events(raw: dict[str, Any]) -> dict[str, list[tuple[str, int, EventRecord]]]:
    events: dict[str, list[tuple[str, int, EventRecord]]] = {}
    for node, entries in raw.items():
        parsed = []
        for e_index, entry in enumerate(entries):
            where = f"events.{node}[{e_index}]"
            parsed.append(
                (
                    str(_require(entry, "log", where)),
                    int(_require(entry, "event_id", where)),
                    EventRecord(
                        timestamp=_parse_timestamp(_require(entry, "timestamp", where), where),
                        message=str(entry.get("message", "")),
                        node=str(node),
                    ),
                )
            )
        events[str(node)] = parsed
    return events


def parse_snapshot(data: dict[str, Any]) -> tuple[SnapshotTopology, SnapshotEventSource]:
    """Build a topology and event source from an already-decoded snapshot.

    Raises:
        SnapshotError: if the document does not follow the snapshot layout.
    """
    if not isinstance(data, dict):
        raise SnapshotError("snapshot root must be a JSON object")
    try:
        clusters = dict(_parse_cluster(c, i) for i, c in enumerate(data.get("clusters", [])))
        events = _parse_events(data.get("events", {}))
    except (AttributeError, TypeError, ValueError) as exc:
        raise SnapshotError(f"malformed snapshot: {exc}") from exc
    return SnapshotTopology(clusters), SnapshotEventSource(events)


def load_snapshot(path: str | Path) -> tuple[SnapshotTopology, SnapshotEventSource]:
    """Read and parse a snapshot file.

    Raises:
        SnapshotError: if the file cannot be read or is malformed.
    """
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SnapshotError(f"cannot read snapshot {p}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise SnapshotError(f"snapshot {p} is not valid JSON: {exc}") from exc

    topology, source = parse_snapshot(data)
    _log.info("snapshot_loaded", path=str(p), clusters=len(topology.cluster_names))
    return topology, source

"""Factories shared by unit and integration tests."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

from clusterreport.errors import NodeUnreachable
from clusterreport.models.events import CATEGORY_BINDINGS, EventCategory, EventRecord, MergedEventStream
from clusterreport.models.topology import ClusterHandle, NodeRef, ResourceGroupView, ResourceView


def ts(hour: int, minute: int = 0, day: int = 18) -> datetime:
    return datetime(2026, 2, day, hour, minute, tzinfo=UTC)


def make_record(message: str, timestamp: datetime, node: str = "N1") -> EventRecord:
    return EventRecord(timestamp=timestamp, message=message, node=node)


def make_stream(category: EventCategory, *records: EventRecord) -> MergedEventStream:
    ordered = sorted(records, key=lambda r: r.timestamp, reverse=True)
    return MergedEventStream(category=category, records=tuple(ordered))


def empty_streams() -> dict[EventCategory, MergedEventStream]:
    return {category: MergedEventStream(category=category) for category in EventCategory}


def make_group(name: str, owner_node: str = "N1", state: str = "Online") -> ResourceGroupView:
    return ResourceGroupView(name=name, owner_node=owner_node, state=state)


def make_resource(name: str, group: str, owner_node: str = "N1", state: str = "Online") -> ResourceView:
    return ResourceView(name=name, owner_group=group, owner_node=owner_node, state=state)


class FakeEventSource:
    """In-memory EventSource keyed by (node, category).

    Nodes listed in *unreachable* raise NodeUnreachable.  Every call is
    recorded in ``calls``.
    """

    def __init__(
        self,
        events: dict[tuple[str, EventCategory], list[EventRecord]] | None = None,
        unreachable: Iterable[str] = (),
    ) -> None:
        self._events = events or {}
        self._unreachable = set(unreachable)
        self.calls: list[tuple[str, str, int]] = []

    async def fetch_events(self, node: str, log_name: str, event_id: int) -> list[EventRecord]:
        self.calls.append((node, log_name, event_id))
        if node in self._unreachable:
            raise NodeUnreachable(node, "connection refused")
        for category, binding in CATEGORY_BINDINGS.items():
            if binding.log_name == log_name and binding.event_id == event_id:
                return list(self._events.get((node, category), []))
        return []


def make_topology(
    nodes: Iterable[str] = ("N1", "N2"),
    groups: Iterable[ResourceGroupView] = (),
    resources: dict[str, list[ResourceView]] | None = None,
    cluster: str = "C1",
) -> MagicMock:
    resource_map = resources or {}
    topology = MagicMock()
    topology.resolve_cluster = AsyncMock(return_value=ClusterHandle(name=cluster))
    topology.list_nodes = AsyncMock(return_value=[NodeRef(name=n) for n in nodes])
    topology.list_resource_groups = AsyncMock(return_value=list(groups))
    topology.list_resources = AsyncMock(side_effect=lambda _cluster, group: list(resource_map.get(group.name, [])))
    return topology

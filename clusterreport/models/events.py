"""Core event data structures and enumerations."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class EventCategory(StrEnum):
    """State transition tracked by the report."""

    CAME_ONLINE = "came_online"
    WENT_OFFLINE = "went_offline"
    ENTERED_ERROR = "entered_error"
    ENTERED_DEGRADED = "entered_degraded"


@dataclass(frozen=True)
class EventBinding:
    """Location of a category's events on every node's event log."""

    log_name: str
    event_id: int


_CLUSTER_LOG = "Microsoft-Windows-FailoverClustering/Operational"
_SYSTEM_LOG = "System"

CATEGORY_BINDINGS: dict[EventCategory, EventBinding] = {
    EventCategory.CAME_ONLINE: EventBinding(_CLUSTER_LOG, 1201),
    EventCategory.WENT_OFFLINE: EventBinding(_CLUSTER_LOG, 1204),
    EventCategory.ENTERED_ERROR: EventBinding(_SYSTEM_LOG, 1069),
    EventCategory.ENTERED_DEGRADED: EventBinding(_SYSTEM_LOG, 1205),
}


@dataclass(frozen=True)
class EventRecord:
    """A single entry read from a node's event log.

    Produced by an event source, consumed by the aggregator and correlator.
    Immutable: lives only for the duration of one report generation.
    """

    timestamp: datetime
    message: str
    node: str = ""


@dataclass(frozen=True)
class MergedEventStream:
    """All nodes' events for one category, newest first."""

    category: EventCategory
    records: tuple[EventRecord, ...] = ()

    def __iter__(self) -> Iterator[EventRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

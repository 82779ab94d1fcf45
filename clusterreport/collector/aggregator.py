"""Event aggregator: one merged, newest-first stream per category.

Fetches run once per category per report, never once per resource group;
group correlation is an in-memory scan over the merged streams.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import replace
from datetime import UTC

import structlog

from clusterreport.collector.source import EventSource
from clusterreport.models.events import (
    CATEGORY_BINDINGS,
    EventCategory,
    EventRecord,
    MergedEventStream,
)
from clusterreport.models.topology import NodeRef

_log = structlog.get_logger(component="collector.aggregator")


def _as_utc(record: EventRecord) -> EventRecord:
    # Naive timestamps from a source are taken as UTC
    if record.timestamp.tzinfo is None:
        return replace(record, timestamp=record.timestamp.replace(tzinfo=UTC))
    return record


def merge(per_node: Sequence[Sequence[EventRecord]], category: EventCategory) -> MergedEventStream:
    """Concatenate per-node results and sort them by timestamp, newest first."""
    combined = [_as_utc(record) for records in per_node for record in records]
    combined.sort(key=lambda r: r.timestamp, reverse=True)
    return MergedEventStream(category=category, records=tuple(combined))


async def aggregate(
    source: EventSource,
    nodes: Sequence[NodeRef],
    category: EventCategory,
) -> MergedEventStream:
    """Fetch *category* from every node concurrently and merge the results.

    *source* is expected to be tolerant (see TolerantEventSource); any
    exception it raises propagates and aborts the report.
    """
    binding = CATEGORY_BINDINGS[category]
    per_node = await asyncio.gather(
        *(source.fetch_events(node.name, binding.log_name, binding.event_id) for node in nodes)
    )
    stream = merge(per_node, category)
    _log.debug(
        "category_aggregated",
        category=category.value,
        nodes=len(nodes),
        events=len(stream),
    )
    return stream


async def aggregate_all(
    source: EventSource,
    nodes: Sequence[NodeRef],
) -> dict[EventCategory, MergedEventStream]:
    """Aggregate all four categories concurrently."""
    categories = list(EventCategory)
    streams = await asyncio.gather(*(aggregate(source, nodes, c) for c in categories))
    return dict(zip(categories, streams, strict=True))

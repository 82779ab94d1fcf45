"""Report assembler: joins live group/resource state with correlated timestamps."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass

from clusterreport.correlation import DEFAULT_MATCHER, GroupMatcher, most_recent_or_na
from clusterreport.models.events import EventCategory, MergedEventStream
from clusterreport.models.report import GroupRow, ReportRow, ResourceRow, Timestamp
from clusterreport.models.topology import ResourceGroupView, ResourceView

ListResources = Callable[[ResourceGroupView], Awaitable[Sequence[ResourceView]]]


@dataclass(frozen=True)
class GroupTimestamps:
    """Most recent transition of one group in each category."""

    last_online: Timestamp
    last_offline: Timestamp
    last_error: Timestamp
    last_degraded: Timestamp


def group_timestamps(
    streams: Mapping[EventCategory, MergedEventStream],
    group_name: str,
    matcher: GroupMatcher = DEFAULT_MATCHER,
) -> GroupTimestamps:
    def _latest(category: EventCategory) -> Timestamp:
        return most_recent_or_na(streams[category], group_name, matcher)

    return GroupTimestamps(
        last_online=_latest(EventCategory.CAME_ONLINE),
        last_offline=_latest(EventCategory.WENT_OFFLINE),
        last_error=_latest(EventCategory.ENTERED_ERROR),
        last_degraded=_latest(EventCategory.ENTERED_DEGRADED),
    )


async def assemble(
    cluster_name: str,
    groups: Sequence[ResourceGroupView],
    streams: Mapping[EventCategory, MergedEventStream],
    detailed: bool,
    list_resources: ListResources,
    matcher: GroupMatcher = DEFAULT_MATCHER,
) -> list[ReportRow]:
    """Build one row per group, or one row per resource when *detailed*.

    Groups keep the order they were listed in.  Group rows surface the
    degraded timestamp and resource rows the error timestamp; neither variant
    carries both.  Resource rows reuse their group's timestamps.
    """
    rows: list[ReportRow] = []
    for group in groups:
        ts = group_timestamps(streams, group.name, matcher)

        if not detailed:
            rows.append(
                GroupRow(
                    cluster_name=cluster_name,
                    resource_group=group.name,
                    server_name=group.owner_node,
                    resource_status=group.state,
                    last_online=ts.last_online,
                    last_offline=ts.last_offline,
                    last_degraded=ts.last_degraded,
                )
            )
            continue

        for resource in await list_resources(group):
            rows.append(
                ResourceRow(
                    cluster_name=cluster_name,
                    resource_group=group.name,
                    resource=resource.name,
                    server_name=resource.owner_node,
                    resource_status=resource.state,
                    last_online=ts.last_online,
                    last_offline=ts.last_offline,
                    last_error=ts.last_error,
                )
            )
    return rows

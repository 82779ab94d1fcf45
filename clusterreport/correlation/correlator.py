"""Per-group correlation over merged event streams."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from clusterreport.correlation.matcher import DEFAULT_MATCHER, GroupMatcher
from clusterreport.models.events import EventRecord
from clusterreport.models.report import NA, Timestamp


def correlate(
    stream: Iterable[EventRecord],
    group_name: str,
    matcher: GroupMatcher = DEFAULT_MATCHER,
) -> list[datetime]:
    """Return timestamps of every event in *stream* whose message concerns *group_name*.

    Order is preserved, so a newest-first stream yields newest-first timestamps.
    """
    return [record.timestamp for record in stream if matcher.matches(record.message, group_name)]


def most_recent_or_na(
    stream: Iterable[EventRecord],
    group_name: str,
    matcher: GroupMatcher = DEFAULT_MATCHER,
) -> Timestamp:
    """Return the first correlated timestamp of a newest-first stream, or NA."""
    for record in stream:
        if matcher.matches(record.message, group_name):
            return record.timestamp
    return NA

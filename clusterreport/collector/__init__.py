"""Collector package for clusterreport.

Reads the four tracked event categories from every node of a cluster and
merges them into newest-first streams.

Submodules
----------
source     -- EventSource protocol and TolerantEventSource (timeouts, unreachable nodes).
aggregator -- aggregate / aggregate_all: concurrent per-node fetch, merge and sort.
"""

from clusterreport.collector.aggregator import aggregate, aggregate_all
from clusterreport.collector.source import EventSource, TolerantEventSource

__all__ = [
    "EventSource",
    "TolerantEventSource",
    "aggregate",
    "aggregate_all",
]

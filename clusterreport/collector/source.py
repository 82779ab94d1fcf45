"""Event source adapter.

``EventSource`` is the contract every concrete event-log reader implements.
Concrete sources may raise for any reason; ``TolerantEventSource`` wraps one
so that a single slow, unreachable or failing node degrades to "no events
from that node" instead of aborting the report.
"""

from __future__ import annotations

import asyncio
from typing import Protocol

import structlog

from clusterreport.errors import NodeUnreachable
from clusterreport.models.events import EventRecord
from clusterreport.observability.metrics import node_fetch_failures_total

_log = structlog.get_logger(component="collector.source")

_DEFAULT_TIMEOUT_SECONDS = 30.0


class EventSource(Protocol):
    """Queries one node's event log for a single event identifier."""

    async def fetch_events(self, node: str, log_name: str, event_id: int) -> list[EventRecord]: ...


class TolerantEventSource:
    """Wraps an EventSource; never raises from ``fetch_events``.

    Args:
        source:  The underlying event source.
        timeout: Per-call deadline in seconds.
    """

    def __init__(self, source: EventSource, timeout: float = _DEFAULT_TIMEOUT_SECONDS) -> None:
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self._source = source
        self._timeout = timeout

    async def fetch_events(self, node: str, log_name: str, event_id: int) -> list[EventRecord]:
        """Return the node's matching events, or ``[]`` if the node could not be read."""
        try:
            records = await asyncio.wait_for(
                self._source.fetch_events(node, log_name, event_id),
                timeout=self._timeout,
            )
        except TimeoutError:
            self._record_failure(node, log_name, event_id, "timeout", f"no response within {self._timeout}s")
            return []
        except NodeUnreachable as exc:
            self._record_failure(node, log_name, event_id, "unreachable", exc.reason or str(exc))
            return []
        except Exception as exc:  # noqa: BLE001
            self._record_failure(node, log_name, event_id, "error", str(exc))
            return []

        _log.debug("node_events_fetched", node=node, log=log_name, event_id=event_id, count=len(records))
        return list(records)

    @staticmethod
    def _record_failure(node: str, log_name: str, event_id: int, reason: str, detail: str) -> None:
        node_fetch_failures_total.labels(reason=reason).inc()
        _log.warning(
            "node_fetch_failed",
            node=node,
            log=log_name,
            event_id=event_id,
            reason=reason,
            detail=detail,
        )

"""Report delivery channels and dispatcher.

ReportChannel    -- ABC every channel must implement.
ReportDispatcher -- Sends a finished report to every registered channel;
                    a failure in one channel never affects the others.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod

import structlog

from clusterreport.models.report import Report
from clusterreport.observability.metrics import report_deliveries_total

_log = structlog.get_logger(component="delivery.manager")


class ReportChannel(ABC):
    """Abstract base class for all delivery channels.

    Every concrete channel must implement ``send``, which should not
    raise. Return ``False`` instead.
    """

    @property
    @abstractmethod
    def channel_name(self) -> str:
        """Human-readable channel identifier used in metrics and logs."""

    @abstractmethod
    async def send(self, report: Report) -> bool:
        """Deliver *report* via this channel.

        Returns:
            True  -- report accepted by the remote endpoint.
            False -- delivery failed (already logged inside implementation).
        """


class ReportDispatcher:
    """Fan-out dispatcher that sends a report to every registered channel."""

    def __init__(self, channels: list[ReportChannel]) -> None:
        self._channels = channels

    @property
    def channels(self) -> list[ReportChannel]:
        return list(self._channels)

    async def deliver(self, report: Report) -> dict[str, bool]:
        """Deliver *report* to every channel concurrently.

        Returns a ``{channel_name: delivered}`` mapping.
        """
        results = await asyncio.gather(*(self._send_one(channel, report) for channel in self._channels))
        return {channel.channel_name: ok for channel, ok in zip(self._channels, results, strict=True)}

    async def _send_one(self, channel: ReportChannel, report: Report) -> bool:
        """Deliver to a single channel, recording metrics regardless of outcome."""
        try:
            success = await channel.send(report)
        except Exception as exc:  # noqa: BLE001
            _log.error(
                "delivery_channel_unexpected_error",
                channel=channel.channel_name,
                cluster=report.cluster_name,
                error=str(exc),
            )
            success = False

        label = "true" if success else "false"
        report_deliveries_total.labels(channel=channel.channel_name, success=label).inc()

        if success:
            _log.info(
                "report_delivered",
                channel=channel.channel_name,
                cluster=report.cluster_name,
                rows=len(report.rows),
            )
        else:
            _log.warning("report_delivery_failed", channel=channel.channel_name, cluster=report.cluster_name)
        return success

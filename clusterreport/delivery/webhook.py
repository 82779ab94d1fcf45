"""Generic JSON webhook delivery channel.

Posts the report as a JSON body to any configured HTTP endpoint, in the same
shape as ``render_json`` produces.
"""

from __future__ import annotations

import json

import httpx
import structlog

from clusterreport.delivery.manager import ReportChannel
from clusterreport.models.report import Report
from clusterreport.report.render import render_json

_log = structlog.get_logger(component="delivery.webhook")


class WebhookReportChannel(ReportChannel):
    """Delivers reports by POSTing a JSON payload to a configurable URL.

    Args:
        url:     Full endpoint URL (must be HTTPS in production).
        headers: Optional extra headers (e.g. Authorization).
        timeout: HTTP request timeout in seconds. Defaults to 10.
    """

    def __init__(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        timeout: float = 10.0,
    ) -> None:
        if not url:
            raise ValueError("Webhook url must not be empty")
        self._url = url
        self._headers = headers or {}
        self._timeout = timeout

    @property
    def channel_name(self) -> str:
        return "webhook"

    async def send(self, report: Report) -> bool:
        """POST *report* as JSON to the configured endpoint.

        Returns True on 2xx response, False otherwise.
        """
        payload = json.loads(render_json(report))
        request_headers = {
            "Content-Type": "application/json",
            **self._headers,
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    self._url,
                    json=payload,
                    headers=request_headers,
                )
                if response.is_success:
                    return True
                _log.warning(
                    "webhook_non_2xx_response",
                    status_code=response.status_code,
                    body=response.text[:200],
                    cluster=report.cluster_name,
                )
                return False
        except httpx.TimeoutException:
            _log.warning("webhook_request_timeout", cluster=report.cluster_name, url=self._url)
            return False
        except httpx.HTTPError as exc:
            _log.warning("webhook_http_error", error=str(exc), cluster=report.cluster_name)
            return False

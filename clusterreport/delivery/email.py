"""Email delivery channel.

Sends a report as an HTML email with the CSV rendering attached, via SMTP
using the standard-library ``smtplib`` executed in a thread-pool executor so
the asyncio event loop is never blocked.
"""

from __future__ import annotations

import asyncio
import html
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import structlog

from clusterreport.delivery.manager import ReportChannel
from clusterreport.models.report import Report
from clusterreport.report.render import render_csv, render_table, report_records

_log = structlog.get_logger(component="delivery.email")


class SMTPConfig:
    """SMTP connection parameters.

    Args:
        host:       SMTP server hostname.
        port:       SMTP server port (587 for STARTTLS, 465 for SSL).
        username:   SMTP authentication username.
        password:   SMTP authentication password.
        use_tls:    If True, use SMTP_SSL (port 465). Defaults to False
                    (STARTTLS on port 587).
        from_addr:  Sender email address.
        timeout:    Socket timeout in seconds. Defaults to 10.
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        from_addr: str,
        use_tls: bool = False,
        timeout: float = 10.0,
    ) -> None:
        if not host:
            raise ValueError("SMTP host must not be empty")
        if not from_addr:
            raise ValueError("SMTP from_addr must not be empty")
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.from_addr = from_addr
        self.use_tls = use_tls
        self.timeout = timeout


class EmailReportChannel(ReportChannel):
    """Delivers reports as HTML emails via SMTP.

    Args:
        smtp_config: Connection and authentication parameters.
        to_addr:     Recipient email address.
    """

    def __init__(self, smtp_config: SMTPConfig, to_addr: str) -> None:
        if not to_addr:
            raise ValueError("Email to_addr must not be empty")
        self._smtp = smtp_config
        self._to_addr = to_addr

    @property
    def channel_name(self) -> str:
        return "email"

    async def send(self, report: Report) -> bool:
        """Send *report* as an HTML email.

        Returns True on successful delivery, False otherwise.
        """
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self._send_sync, report)
            return True
        except smtplib.SMTPException as exc:
            _log.warning("email_smtp_error", error=str(exc), cluster=report.cluster_name)
            return False
        except OSError as exc:
            _log.warning("email_connection_error", error=str(exc), cluster=report.cluster_name)
            return False

    def _send_sync(self, report: Report) -> None:
        """Blocking SMTP delivery; runs inside a thread executor."""
        msg = self.build_message(report)
        context = ssl.create_default_context()

        if self._smtp.use_tls:
            with smtplib.SMTP_SSL(
                self._smtp.host,
                self._smtp.port,
                context=context,
                timeout=self._smtp.timeout,
            ) as server:
                if self._smtp.username:
                    server.login(self._smtp.username, self._smtp.password)
                server.send_message(msg)
        else:
            with smtplib.SMTP(
                self._smtp.host,
                self._smtp.port,
                timeout=self._smtp.timeout,
            ) as server:
                server.ehlo()
                server.starttls(context=context)
                server.ehlo()
                if self._smtp.username:
                    server.login(self._smtp.username, self._smtp.password)
                server.send_message(msg)

    def build_message(self, report: Report) -> MIMEMultipart:
        """Construct the email: plain-text and HTML bodies plus a CSV attachment."""
        kind = "Resource" if report.detailed else "Resource Group"
        subject = f"[clusterreport] {kind} status for cluster {report.cluster_name}"

        msg = MIMEMultipart("mixed")
        msg["Subject"] = subject
        msg["From"] = self._smtp.from_addr
        msg["To"] = self._to_addr

        body = MIMEMultipart("alternative")
        body.attach(MIMEText(render_table(report), "plain", "utf-8"))
        body.attach(MIMEText(self._build_html(report, kind), "html", "utf-8"))
        msg.attach(body)

        attachment = MIMEText(render_csv(report), "csv", "utf-8")
        attachment.add_header(
            "Content-Disposition",
            "attachment",
            filename=f"{report.cluster_name}-status.csv",
        )
        msg.attach(attachment)
        return msg

    def _build_html(self, report: Report, kind: str) -> str:
        header = "".join(
            f'<th style="text-align: left; padding: 6px; border-bottom: 2px solid #424242;">{html.escape(col)}</th>'
            for col in report.columns
        )
        body_rows = "".join(
            "<tr>"
            + "".join(
                f'<td style="padding: 6px; border-bottom: 1px solid #e0e0e0;">{html.escape(value)}</td>'
                for value in record.values()
            )
            + "</tr>"
            for record in report_records(report)
        )
        generated = report.generated_at.strftime("%Y-%m-%d %H:%M:%S UTC") if report.generated_at else ""
        return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <title>{html.escape(kind)} status: {html.escape(report.cluster_name)}</title>
</head>
<body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
             background: #f5f5f5; margin: 0; padding: 24px;">
  <h1 style="font-size: 18px; color: #212121;">
    {html.escape(kind)} status: {html.escape(report.cluster_name)}
  </h1>
  <table cellpadding="0" cellspacing="0"
         style="background: #ffffff; border-collapse: collapse; font-size: 13px;">
    <tr>{header}</tr>
    {body_rows}
  </table>
  <p style="font-size: 12px; color: #9e9e9e;">Generated {generated}</p>
</body>
</html>"""

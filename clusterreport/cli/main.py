"""Click commands: ``report`` and ``serve``."""

from __future__ import annotations

import asyncio
from pathlib import Path

import click

from clusterreport import __version__
from clusterreport.app import ReportService, build_service, serve
from clusterreport.config import load_config
from clusterreport.errors import ReportGenerationError, SnapshotError
from clusterreport.models.config import ClusterReportConfig
from clusterreport.models.report import Report
from clusterreport.observability.logging import get_logger, setup_logging
from clusterreport.report.render import RENDERERS, render


def _prepare(snapshot: str | None) -> tuple[ClusterReportConfig, ReportService]:
    try:
        config = load_config()
    except ValueError as exc:
        raise click.ClickException(f"invalid configuration: {exc}") from exc
    if snapshot:
        config.collector.snapshot_path = snapshot
    setup_logging(config.log.level)
    try:
        service = build_service(config)
    except (SnapshotError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc
    return config, service


@click.group()
@click.version_option(__version__, prog_name="clusterreport")
def cli() -> None:
    """Status reports for failover cluster resource groups."""


@cli.command()
@click.argument("cluster")
@click.option("--detailed", is_flag=True, help="One row per resource instead of one per resource group.")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(sorted(RENDERERS)),
    default="table",
    show_default=True,
    help="Output format.",
)
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write to a file instead of stdout.")
@click.option("--snapshot", type=click.Path(exists=True, dir_okay=False), help="Cluster snapshot JSON file.")
@click.option(
    "--passthrough/--no-passthrough",
    default=True,
    show_default=True,
    help="Emit the report rows; with --no-passthrough the report is only generated (and delivered).",
)
@click.option("--deliver", is_flag=True, help="Send the report to the configured delivery channels.")
def report(
    cluster: str,
    detailed: bool,
    fmt: str,
    output: Path | None,
    snapshot: str | None,
    passthrough: bool,
    deliver: bool,
) -> None:
    """Generate the status report for CLUSTER."""
    _, service = _prepare(snapshot)
    log = get_logger("cli")

    async def _run() -> tuple[Report, dict[str, bool] | None]:
        generated = await service.generate(cluster, detailed)
        return generated, (await service.deliver(generated) if deliver else None)

    try:
        result, delivered = asyncio.run(_run())
    except ReportGenerationError as exc:
        click.echo(f"error: {exc}", err=True)
        raise SystemExit(1) from exc

    if delivered is not None:
        log.info("report_delivery_summary", cluster=cluster, channels=delivered)
        if delivered and not all(delivered.values()):
            click.echo("warning: one or more delivery channels failed", err=True)

    if not passthrough:
        return

    text = render(result, fmt)
    if output is None:
        click.echo(text, nl=False)
    else:
        output.write_text(text, encoding="utf-8")
        log.info("report_written", path=str(output), rows=len(result.rows))


@cli.command(name="serve")
@click.option("--snapshot", type=click.Path(exists=True, dir_okay=False), help="Cluster snapshot JSON file.")
def serve_command(snapshot: str | None) -> None:
    """Serve reports over the REST API."""
    config, service = _prepare(snapshot)
    asyncio.run(serve(config, service))

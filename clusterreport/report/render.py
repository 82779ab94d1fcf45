"""Report renderers: fixed-width table, CSV and JSON."""

from __future__ import annotations

import csv
import io
import json
from datetime import UTC, datetime

from clusterreport.models.report import Report


def format_value(value: object) -> str:
    """Render a single cell.  Timestamps are ISO-8601 UTC, NA is ``N/A``."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(UTC)
        return value.isoformat()
    return str(value)


def report_records(report: Report) -> list[dict[str, str]]:
    """Every row as an ordered ``{column: rendered cell}`` mapping."""
    return [{col: format_value(val) for col, val in row.as_record().items()} for row in report.rows]


def render_table(report: Report) -> str:
    columns = report.columns
    records = report_records(report)
    widths = [max([len(col)] + [len(r[col]) for r in records]) for col in columns]

    def _line(cells: list[str]) -> str:
        return "  ".join(cell.ljust(w) for cell, w in zip(cells, widths, strict=True)).rstrip()

    lines = [_line(list(columns)), _line(["-" * w for w in widths])]
    lines.extend(_line([r[col] for col in columns]) for r in records)
    return "\n".join(lines) + "\n"


def render_csv(report: Report) -> str:
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=list(report.columns), lineterminator="\n")
    writer.writeheader()
    writer.writerows(report_records(report))
    return buf.getvalue()


def render_json(report: Report) -> str:
    payload = {
        "cluster": report.cluster_name,
        "detailed": report.detailed,
        "generated_at": format_value(report.generated_at) if report.generated_at else None,
        "rows": report_records(report),
    }
    return json.dumps(payload, indent=2) + "\n"


RENDERERS = {
    "table": render_table,
    "csv": render_csv,
    "json": render_json,
}


def render(report: Report, fmt: str = "table") -> str:
    """Render *report* in the named format.

    Raises:
        ValueError: for an unknown format.
    """
    try:
        renderer = RENDERERS[fmt]
    except KeyError:
        raise ValueError(f"Unknown report format: {fmt!r}. Must be one of {sorted(RENDERERS)}") from None
    return renderer(report)

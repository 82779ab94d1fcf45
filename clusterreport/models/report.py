"""Report row data structures and the "not available" sentinel."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import ClassVar, Final


class NotAvailable:
    """Stand-in for a timestamp when no matching event exists.

    A single instance, ``NA``, exists.  It is falsy and renders as ``N/A`` so
    that every timestamp column of a report keeps the same shape.
    """

    _instance: NotAvailable | None = None

    def __new__(cls) -> NotAvailable:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NA"

    def __str__(self) -> str:
        return "N/A"

    def __reduce__(self) -> str:
        return "NA"


NA: Final = NotAvailable()

Timestamp = datetime | NotAvailable

CLUSTER_TYPE = "MSCS"


class _RowMixin:
    """Shared helpers for both row variants."""

    COLUMNS: ClassVar[tuple[str, ...]]

    def as_record(self) -> dict[str, object]:
        """Return the row as an ordered ``{column header: value}`` mapping."""
        values = [getattr(self, f.name) for f in fields(self)]  # type: ignore[arg-type]
        return dict(zip(self.COLUMNS, values, strict=True))


@dataclass(frozen=True)
class GroupRow(_RowMixin):
    """One resource group in a non-detailed report."""

    COLUMNS: ClassVar[tuple[str, ...]] = (
        "ClusterType",
        "ClusterName",
        "ResourceGroup",
        "ServerName",
        "ResourceStatus",
        "LastOnline",
        "LastOffline",
        "LastDegraded",
    )

    cluster_type: str = field(default=CLUSTER_TYPE, init=False)
    cluster_name: str
    resource_group: str
    server_name: str
    resource_status: str
    last_online: Timestamp
    last_offline: Timestamp
    last_degraded: Timestamp


@dataclass(frozen=True)
class ResourceRow(_RowMixin):
    """One resource in a detailed report.

    Timestamps are those of the owning group; events are never correlated
    against the resource name.
    """

    COLUMNS: ClassVar[tuple[str, ...]] = (
        "ClusterType",
        "ClusterName",
        "ResourceGroup",
        "Resource",
        "ServerName",
        "ResourceStatus",
        "LastOnline",
        "LastOffline",
        "LastError",
    )

    cluster_type: str = field(default=CLUSTER_TYPE, init=False)
    cluster_name: str
    resource_group: str
    resource: str
    server_name: str
    resource_status: str
    last_online: Timestamp
    last_offline: Timestamp
    last_error: Timestamp


ReportRow = GroupRow | ResourceRow


@dataclass
class Report:
    """A completed report, as handed to renderers and delivery channels."""

    cluster_name: str
    detailed: bool
    rows: list[ReportRow] = field(default_factory=list)
    generated_at: datetime | None = None

    @property
    def columns(self) -> tuple[str, ...]:
        return ResourceRow.COLUMNS if self.detailed else GroupRow.COLUMNS

"""Core data structures for clusterreport."""

from clusterreport.models.config import ClusterReportConfig
from clusterreport.models.events import (
    CATEGORY_BINDINGS,
    EventBinding,
    EventCategory,
    EventRecord,
    MergedEventStream,
)
from clusterreport.models.report import (
    NA,
    GroupRow,
    NotAvailable,
    Report,
    ReportRow,
    ResourceRow,
    Timestamp,
)
from clusterreport.models.topology import (
    ClusterHandle,
    NodeRef,
    ResourceGroupView,
    ResourceView,
)

__all__ = [
    "CATEGORY_BINDINGS",
    "ClusterHandle",
    "ClusterReportConfig",
    "EventBinding",
    "EventCategory",
    "EventRecord",
    "GroupRow",
    "MergedEventStream",
    "NA",
    "NodeRef",
    "NotAvailable",
    "Report",
    "ReportRow",
    "ResourceGroupView",
    "ResourceRow",
    "ResourceView",
    "Timestamp",
]

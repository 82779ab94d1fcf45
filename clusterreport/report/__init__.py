"""Report assembly, orchestration and rendering."""

from clusterreport.report.assembler import GroupTimestamps, assemble, group_timestamps
from clusterreport.report.driver import DriverState, ReportDriver, build_report, generate_report
from clusterreport.report.render import render, render_csv, render_json, render_table

__all__ = [
    "DriverState",
    "GroupTimestamps",
    "ReportDriver",
    "assemble",
    "build_report",
    "generate_report",
    "group_timestamps",
    "render",
    "render_csv",
    "render_json",
    "render_table",
]

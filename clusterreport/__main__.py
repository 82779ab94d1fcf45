"""Entry point for `python -m clusterreport`.

Usage:
    python -m clusterreport report CLUSTER
    python -m clusterreport serve
"""

from __future__ import annotations

from clusterreport.cli import cli

cli()

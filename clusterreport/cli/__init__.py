"""clusterreport command-line interface.

Exposes:
    cli -- Click group entry point (registered as ``clusterreport`` script).
"""

from clusterreport.cli.main import cli

__all__ = ["cli"]

"""clusterreport: point-in-time status reports for failover cluster resource groups."""

__version__ = "0.3.1"

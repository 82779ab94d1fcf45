"""Logging and metrics for clusterreport."""

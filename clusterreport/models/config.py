"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class CollectorConfig:
    """Event collection configuration."""

    snapshot_path: str = ""
    node_fetch_timeout: float = 30.0


@dataclass
class MatchConfig:
    """Event-to-group matching configuration."""

    strategy: str = "substring"
    ignore_case: bool = False


@dataclass
class DeliveryConfig:
    """Report delivery configuration."""

    email_secret_ref: str = ""
    email_to: str = ""
    webhook_secret_ref: str = ""


@dataclass
class APIConfig:
    """REST API configuration."""

    port: int = 8080


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"


@dataclass
class ClusterReportConfig:
    """Top-level clusterreport configuration."""

    collector: CollectorConfig = field(default_factory=CollectorConfig)
    match: MatchConfig = field(default_factory=MatchConfig)
    delivery: DeliveryConfig = field(default_factory=DeliveryConfig)
    api: APIConfig = field(default_factory=APIConfig)
    log: LogConfig = field(default_factory=LogConfig)

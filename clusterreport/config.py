"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from clusterreport.models.config import (
    APIConfig,
    ClusterReportConfig,
    CollectorConfig,
    DeliveryConfig,
    LogConfig,
    MatchConfig,
)

MATCH_STRATEGIES = ("substring", "token")


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"CLUSTERREPORT_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _env_int(key: str, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    val = int(_env(key, str(default)))
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _env_float(
    key: str,
    default: float,
    min_val: float | None = None,
    max_val: float | None = None,
) -> float:
    val = float(_env(key, str(default)))
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _validate_match_strategy(value: str) -> str:
    if value.lower() not in MATCH_STRATEGIES:
        raise ValueError(f"Invalid match strategy: {value}. Must be one of {MATCH_STRATEGIES}")
    return value.lower()


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def load_config() -> ClusterReportConfig:
    """Load configuration from CLUSTERREPORT_* environment variables."""
    return ClusterReportConfig(
        collector=CollectorConfig(
            snapshot_path=_env("SNAPSHOT_PATH", ""),
            node_fetch_timeout=_env_float("NODE_FETCH_TIMEOUT", 30.0, min_val=1.0, max_val=300.0),
        ),
        match=MatchConfig(
            strategy=_validate_match_strategy(_env("MATCH_STRATEGY", "substring")),
            ignore_case=_env_bool("MATCH_IGNORE_CASE", False),
        ),
        delivery=DeliveryConfig(
            email_secret_ref=_env("DELIVERY_EMAIL_SECRET_REF", ""),
            email_to=_env("DELIVERY_EMAIL_TO", ""),
            webhook_secret_ref=_env("DELIVERY_WEBHOOK_SECRET_REF", ""),
        ),
        api=APIConfig(
            port=_env_int("API_PORT", 8080, min_val=1024, max_val=65535),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
        ),
    )

"""Shared fixtures for clusterreport integration tests.

Provides a snapshot file on disk and a fully wired ReportService built from
it, so integration tests exercise the real topology, tolerant event source,
aggregator, correlator and assembler together.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from clusterreport.app import ReportService, build_service
from clusterreport.models.config import ClusterReportConfig, CollectorConfig

_SAMPLE = Path(__file__).resolve().parents[2] / "samples" / "cluster-snapshot.json"


@pytest.fixture
def snapshot_data() -> dict:
    return json.loads(_SAMPLE.read_text(encoding="utf-8"))


@pytest.fixture
def snapshot_path(tmp_path: Path, snapshot_data: dict) -> Path:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot_data), encoding="utf-8")
    return path


@pytest.fixture
def config(snapshot_path: Path) -> ClusterReportConfig:
    return ClusterReportConfig(collector=CollectorConfig(snapshot_path=str(snapshot_path), node_fetch_timeout=5.0))


@pytest.fixture
def service(config: ClusterReportConfig) -> ReportService:
    return build_service(config)

"""Tests for src/sync/runner.py"""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from src.common.errors import ImportRunError
from src.common.settings import Settings
from src.models import STATUS_CREATED, ImportRunSummary, ProductResult
from src.sync.runner import EXIT_FAILURE, EXIT_OK, ImportRunner, log_file_path

HEALTHY = {"status": "healthy", "services": {"shopify": {"status": "connected"},
                                             "senetic": {"status": "connected"}}}
DEGRADED = {"status": "degraded", "services": {"shopify": {"status": "disconnected"},
                                               "senetic": {"status": "connected"}}}


@pytest.fixture
def settings():
    return Settings(senetic_auth="Basic x", shopify_store_url="test-store", shopify_access_token="shpat_test")


@pytest.fixture
def summary():
    summary = ImportRunSummary()
    summary.record_result(ProductResult("UAP-AC-PRO", "Ubiquiti UniFi AP AC Pro", STATUS_CREATED, product_id=1001))
    return summary


def _orchestrator(summary=None, error=None):
    orchestrator = MagicMock()
    if error is not None:
        orchestrator.run.side_effect = error
    else:
        orchestrator.run.return_value = summary
    return orchestrator


def _report(log_dir, name):
    paths = list(Path(log_dir).glob(f"{name}-*.json"))
    assert len(paths) == 1
    return json.loads(paths[0].read_text(encoding="utf-8"))


class TestLogFilePath:
    def test_dated_name(self):
        assert log_file_path(Path("logs"), "2026-01-02") == Path("logs/import-2026-01-02.log")


class TestRun:
    def test_success_writes_report(self, settings, summary, tmp_path):
        runner = ImportRunner(settings, log_dir=tmp_path,
                              orchestrator_factory=lambda: _orchestrator(summary),
                              health_check=lambda: HEALTHY)

        assert runner.run() == EXIT_OK

        report = _report(tmp_path, "report")
        assert report["status"] == "success"
        assert report["summary"]["imported"] == 1
        assert report["products"][0]["sku"] == "UAP-AC-PRO"

    def test_missing_configuration(self, summary, tmp_path):
        factory = MagicMock()
        runner = ImportRunner(Settings(), log_dir=tmp_path, orchestrator_factory=factory,
                              health_check=lambda: HEALTHY)

        assert runner.run() == EXIT_FAILURE

        report = _report(tmp_path, "error-report")
        assert report["error"]["type"] == "ConfigurationError"
        assert "SENETIC_AUTH" in report["error"]["message"]
        factory.assert_not_called()

    def test_unhealthy_upstream(self, settings, tmp_path):
        factory = MagicMock()
        runner = ImportRunner(settings, log_dir=tmp_path, orchestrator_factory=factory,
                              health_check=lambda: DEGRADED)

        assert runner.run() == EXIT_FAILURE
        factory.assert_not_called()

    def test_skip_health_check(self, settings, summary, tmp_path):
        health = MagicMock()
        runner = ImportRunner(settings, log_dir=tmp_path, skip_health_check=True,
                              orchestrator_factory=lambda: _orchestrator(summary), health_check=health)

        assert runner.run() == EXIT_OK
        health.assert_not_called()

    def test_import_failure_reports_partial_summary(self, settings, tmp_path):
        partial = ImportRunSummary()
        error = ImportRunError("catalogue feed fetch failed: HTTP 500", partial)
        runner = ImportRunner(settings, log_dir=tmp_path,
                              orchestrator_factory=lambda: _orchestrator(error=error),
                              health_check=lambda: HEALTHY)

        assert runner.run() == EXIT_FAILURE

        report = _report(tmp_path, "error-report")
        assert report["status"] == "error"
        assert report["error"]["type"] == "ImportRunError"
        assert report["summary"]["imported"] == 0

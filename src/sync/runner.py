"""
Non-interactive import runner.

Used by the command-line entry point (cron, CI): verifies configuration,
checks upstream health, runs the import and writes a dated JSON report
next to the run log. The exit status tells the scheduler whether the run
succeeded.
"""

from __future__ import annotations

import json
import logging
import os
import platform
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from ..common.errors import ConfigurationError, ImportRunError
from ..common.settings import Settings
from ..models import ImportRunSummary
from ..senetic.api_client import SeneticAPIClient
from ..shopify.api_client import ShopifyAPIClient
from .health import STATUS_HEALTHY, check_health
from .importer import ImportOrchestrator

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def log_file_path(log_dir: Path, day: Optional[str] = None) -> Path:
    day = day or datetime.now().strftime("%Y-%m-%d")
    return Path(log_dir) / f"import-{day}.log"


class ImportRunner:
    """
    Runs one import end to end and reports the outcome on disk.

    Usage:
        runner = ImportRunner(settings, log_dir=Path("logs"))
        sys.exit(runner.run())
    """

    def __init__(
        self,
        settings: Settings,
        log_dir: Path = Path("logs"),
        dry_run: bool = False,
        skip_health_check: bool = False,
        orchestrator_factory: Optional[Callable[..., ImportOrchestrator]] = None,
        health_check: Optional[Callable[[], Dict[str, Any]]] = None,
    ):
        self.settings = settings
        self.log_dir = Path(log_dir)
        self.dry_run = dry_run
        self.skip_health_check = skip_health_check
        self.orchestrator_factory = orchestrator_factory or self._default_orchestrator
        self.health_check = health_check or self._default_health_check
        self.start_time = time.monotonic()

    def _default_orchestrator(self) -> ImportOrchestrator:
        return ImportOrchestrator.from_settings(self.settings, dry_run=self.dry_run, source="cli")

    def _default_health_check(self) -> Dict[str, Any]:
        senetic = SeneticAPIClient(self.settings.senetic_auth, self.settings.senetic_base_url,
                                   self.settings.senetic_lang)
        with ShopifyAPIClient(self.settings.shopify_store_url, self.settings.shopify_access_token) as shopify:
            try:
                return check_health(shopify, senetic)
            finally:
                senetic.close()

    def verify_configuration(self) -> None:
        """
        Raises:
            ConfigurationError: A required variable is missing
        """
        logger.info("Verifying configuration...")
        missing = self.settings.missing_required()
        if missing:
            raise ConfigurationError(f"Missing environment variables: {', '.join(missing)}")
        logger.info("Configuration verified")

    def verify_health(self) -> None:
        """
        Raises:
            ConfigurationError: An upstream service is unreachable
        """
        logger.info("Running health check...")
        report = self.health_check()
        for name, service in report["services"].items():
            logger.info("%s: %s", name, service["status"])
        if report["status"] != STATUS_HEALTHY:
            raise ConfigurationError(f"Health check failed: {report['status']}")

    def _environment(self) -> Dict[str, Any]:
        return {
            "python_version": platform.python_version(),
            "platform": platform.platform(),
            "github_run_id": os.getenv("GITHUB_RUN_ID"),
            "github_run_number": os.getenv("GITHUB_RUN_NUMBER"),
        }

    def _write_report(self, name: str, report: Dict[str, Any]) -> Path:
        self.log_dir.mkdir(parents=True, exist_ok=True)
        day = datetime.now().strftime("%Y-%m-%d")
        path = self.log_dir / f"{name}-{day}.json"
        with open(path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2, ensure_ascii=False, default=str)
        logger.info("Report saved: %s", path)
        return path

    def generate_report(self, summary: ImportRunSummary) -> Path:
        return self._write_report("report", {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "duration": round(time.monotonic() - self.start_time),
            "status": "success",
            "dry_run": self.dry_run,
            "summary": summary.to_dict(),
            "environment": self._environment(),
            "products": [result.to_dict() for result in summary.results],
        })

    def generate_error_report(self, error: Exception, summary: Optional[ImportRunSummary] = None) -> Path:
        report = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "duration": round(time.monotonic() - self.start_time),
            "status": "error",
            "error": {"type": type(error).__name__, "message": str(error)},
            "environment": self._environment(),
        }
        if summary is not None:
            report["summary"] = summary.to_dict()
        return self._write_report("error-report", report)

    def log_summary(self, summary: ImportRunSummary) -> None:
        logger.info("Import completed: %s", json.dumps(summary.counters()))
        logger.info("Duration: %ds", summary.duration)
        logger.info("Imported: %d", summary.imported)
        logger.info("Updated: %d", summary.updated)
        logger.info("Skipped: %d (no inventory %d, zero stock %d)",
                    summary.skipped, summary.skipped_no_inventory, summary.skipped_zero_stock)
        logger.info("Failed: %d", summary.failed)
        logger.info("Images: %d uploaded, %d failed", summary.images_uploaded, summary.images_failed)
        for error in summary.errors:
            logger.warning("  - %s: %s", error.get("sku"), error.get("error"))

    def run(self) -> int:
        """
        Returns:
            EXIT_OK on success, EXIT_FAILURE when configuration, health or
            the feed fetch failed
        """
        logger.info("Starting Senetic -> Shopify import%s", " (dry run)" if self.dry_run else "")
        try:
            self.verify_configuration()
            if not self.skip_health_check:
                self.verify_health()
            summary = self.orchestrator_factory().run()
        except ImportRunError as e:
            logger.error("Import failed: %s", e)
            self.generate_error_report(e, e.summary)
            return EXIT_FAILURE
        except ConfigurationError as e:
            logger.error("Critical error: %s", e)
            self.generate_error_report(e)
            return EXIT_FAILURE

        self.log_summary(summary)
        self.generate_report(summary)
        logger.info("Import finished successfully")
        return EXIT_OK

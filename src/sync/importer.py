"""
Import Orchestrator

Runs one Senetic -> Shopify import:
1. Fetch inventory and catalogue (the two reads run concurrently)
2. Index inventory by manufacturer item code
3. Filter the catalogue by category (and brand, when configured)
4. Reconcile every candidate sequentially, pausing after each one
5. Return the run summary

Nothing is kept between runs.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..common.errors import FeedFetchError, ImportRunError
from ..common.pacing import Pacer
from ..common.settings import Settings
from ..content.description_cleaner import DescriptionProcessor
from ..images.cloudinary_client import CloudinaryClient
from ..images.domains import DomainClassifier
from ..images.relocator import ImageRelocator
from ..models import ImportRunSummary, SupplierCatalogueRecord
from ..notifications.webhook import WebhookNotifier
from ..senetic.api_client import SeneticAPIClient
from ..shopify.api_client import ShopifyAPIClient
from ..shopify.products import ShopifyProductStore
from .filters import FilterCriteria, filter_catalogue
from .inventory import InventoryIndex, build_inventory_index
from .reconciler import CandidateState, CatalogueReconciler, classify_candidate

logger = logging.getLogger(__name__)


class ImportOrchestrator:
    """
    Sequences feed fetch, filtering and reconciliation for one run.

    Usage:
        orchestrator = ImportOrchestrator.from_settings(Settings.from_env())
        summary = orchestrator.run()
        summary.to_dict()
    """

    def __init__(
        self,
        senetic: SeneticAPIClient,
        reconciler: CatalogueReconciler,
        criteria: FilterCriteria,
        pacer: Optional[Callable[[float], None]] = None,
        product_delay: float = 0.5,
        max_products: Optional[int] = None,
        notifier: Optional[WebhookNotifier] = None,
        source: str = "manual",
    ):
        """
        Args:
            senetic: Feed client
            reconciler: Per-product create/update engine
            criteria: Category/brand filter
            pacer: Wait strategy between products
            product_delay: Pause after each candidate (seconds)
            max_products: Optional cap on candidates processed (None = all)
            notifier: Optional webhook for lifecycle events
            source: Who started the run, reported to the webhook
        """
        self.senetic = senetic
        self.reconciler = reconciler
        self.criteria = criteria
        self.pace = pacer or Pacer()
        self.product_delay = product_delay
        self.max_products = max_products
        self.notifier = notifier or WebhookNotifier()
        self.source = source

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        dry_run: bool = False,
        pacer: Optional[Callable[[float], None]] = None,
        source: str = "manual",
    ) -> "ImportOrchestrator":
        """Wire clients and services from settings."""
        pacer = pacer or Pacer()
        classifier = DomainClassifier(settings.direct_image_hosts, settings.relay_image_hosts)
        store = ShopifyProductStore(
            ShopifyAPIClient(settings.shopify_store_url, settings.shopify_access_token)
        )

        cloudinary = None
        if settings.cloudinary_configured:
            cloudinary = CloudinaryClient(
                settings.cloudinary_cloud_name,
                settings.cloudinary_api_key,
                settings.cloudinary_api_secret,
            )
        else:
            logger.warning("Cloudinary not configured: images from relay hosts will fail")

        relocator = ImageRelocator(
            store,
            classifier,
            cloudinary=cloudinary,
            pacer=pacer,
            image_delay=settings.image_delay,
            relay_delay=settings.relay_delay,
            dry_run=dry_run,
        )
        reconciler = CatalogueReconciler(
            store,
            DescriptionProcessor(classifier, settings.relative_image_base_url),
            relocator=relocator,
            dry_run=dry_run,
        )
        return cls(
            senetic=SeneticAPIClient(settings.senetic_auth, settings.senetic_base_url, settings.senetic_lang),
            reconciler=reconciler,
            criteria=FilterCriteria(categories=settings.categories, brands=settings.brands),
            pacer=pacer,
            product_delay=settings.product_delay,
            max_products=settings.max_products,
            notifier=WebhookNotifier(settings.webhook_url),
            source=source,
        )

    def fetch_feeds(self) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
        """
        Fetch inventory and catalogue concurrently.

        Raises:
            FeedFetchError: Either feed failed
        """
        with ThreadPoolExecutor(max_workers=2) as executor:
            inventory_future = executor.submit(self.senetic.fetch_inventory)
            catalogue_future = executor.submit(self.senetic.fetch_catalogue)
            return inventory_future.result(), catalogue_future.result()

    def select_candidates(self, catalogue_lines: List[Dict[str, Any]]) -> List[SupplierCatalogueRecord]:
        records = []
        for line in catalogue_lines:
            if not isinstance(line, dict):
                logger.warning("Skipping malformed catalogue line: %.80r", line)
                continue
            records.append(SupplierCatalogueRecord.from_feed_line(line))
        candidates = filter_catalogue(records, self.criteria)
        if self.max_products is not None and len(candidates) > self.max_products:
            logger.info("Limiting run to the first %d of %d products", self.max_products, len(candidates))
            candidates = candidates[:self.max_products]
        return candidates

    def process_candidate(
        self,
        record: SupplierCatalogueRecord,
        inventory: InventoryIndex,
        summary: ImportRunSummary,
    ) -> None:
        """Classify one record, reconcile it if eligible, merge the outcome."""
        sku = record.manufacturer_item_code
        state, item = classify_candidate(record, inventory)

        if state is CandidateState.UNMATCHED:
            logger.info("Skipping %s - not found in inventory", sku)
            summary.record_skip_no_inventory()
            return
        if state is CandidateState.ZERO_STOCK:
            logger.info("Skipping %s - zero stock", sku)
            summary.record_skip_zero_stock()
            return

        result = self.reconciler.reconcile(record, item)
        summary.record_result(result)
        logger.info("Product %s: %s", sku, result.status.upper())

    def run(self) -> ImportRunSummary:
        """
        Run the import.

        Returns:
            ImportRunSummary with counters, errors and per-product results

        Raises:
            ImportRunError: A feed could not be fetched (carries the partial summary)
        """
        start = time.monotonic()
        summary = ImportRunSummary()
        logger.info("Starting Shopify import process...")
        self.notifier.notify_import_start({"source": self.source, "batch_size": self.max_products})

        try:
            inventory_lines, catalogue_lines = self.fetch_feeds()
        except FeedFetchError as e:
            summary.duration = round(time.monotonic() - start)
            logger.error("Import process failed: %s", e)
            self.notifier.notify_import_error({"error": str(e), "summary": summary.to_dict()})
            raise ImportRunError(str(e), summary) from e

        inventory = build_inventory_index(inventory_lines)
        candidates = self.select_candidates(catalogue_lines)
        total = len(candidates)
        logger.info("Processing %d products...", total)

        for position, record in enumerate(candidates, 1):
            logger.info("Processing %d/%d: %s", position, total, record.manufacturer_item_code)
            self.process_candidate(record, inventory, summary)
            self.notifier.notify_import_progress({
                "current": position,
                "total": total,
                "product_sku": record.manufacturer_item_code,
                "product_title": record.item_description,
            })
            self.pace(self.product_delay)

        summary.duration = round(time.monotonic() - start)
        logger.info("Import completed in %ds: %s", summary.duration, summary.counters())
        self.notifier.notify_import_complete({
            "summary": summary.to_dict(),
            "duration": summary.duration,
            "total_processed": summary.processed,
        })
        return summary

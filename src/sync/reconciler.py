"""
Catalogue Reconciler

Decides, per catalogue record, whether to skip it, create a new Shopify
product or update the existing one, performs the write and attaches the
description images.

Candidate states:
    UNMATCHED   - no inventory line for the item code  -> skip
    ZERO_STOCK  - inventory total is 0                 -> skip
    ELIGIBLE    - create / update / recreate (stale reference)
"""

import logging
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..common.errors import ShopifyNotFoundError, describe_error
from ..content.description_cleaner import DescriptionProcessor
from ..images.relocator import ImageRelocator
from ..models import (
    STATUS_CREATED,
    STATUS_ERROR,
    STATUS_UPDATED,
    ImageUploadResult,
    ProductResult,
    StorefrontProductDraft,
    SupplierCatalogueRecord,
    SupplierInventoryRecord,
)
from ..shopify.products import ShopifyProductStore
from .drafts import build_product_draft
from .inventory import InventoryIndex

logger = logging.getLogger(__name__)


class CandidateState(Enum):
    UNMATCHED = "unmatched"
    ZERO_STOCK = "zero_stock"
    ELIGIBLE = "eligible"


def classify_candidate(
    record: SupplierCatalogueRecord,
    inventory: InventoryIndex,
) -> Tuple[CandidateState, Optional[SupplierInventoryRecord]]:
    """Look up the record's inventory and apply the stock gate."""
    item = inventory.get(record.manufacturer_item_code)
    if item is None:
        return CandidateState.UNMATCHED, None
    if item.available_quantity <= 0:
        return CandidateState.ZERO_STOCK, item
    return CandidateState.ELIGIBLE, item


class CatalogueReconciler:
    """
    Creates or updates one Shopify product per eligible catalogue record.

    Usage:
        reconciler = CatalogueReconciler(store, processor, relocator)
        result = reconciler.reconcile(record, inventory_item)
        result.status   # 'created', 'updated' or 'errore'
    """

    def __init__(
        self,
        store: ShopifyProductStore,
        processor: DescriptionProcessor,
        relocator: Optional[ImageRelocator] = None,
        dry_run: bool = False,
    ):
        """
        Args:
            store: Shopify product operations
            processor: Description cleaner / image extractor
            relocator: Image uploader; images are skipped without one
            dry_run: Look products up but do not write anything
        """
        self.store = store
        self.processor = processor
        self.relocator = relocator
        self.dry_run = dry_run

    def _create(self, draft: StorefrontProductDraft) -> Dict:
        if self.dry_run:
            logger.info("[DRY RUN] Would create product %s", draft.sku)
            return {}
        product = self.store.create_product(draft.to_payload())
        logger.info("Created product %s (ID %s)", draft.sku, product.get("id"))
        return product

    def _update(self, product_id, draft: StorefrontProductDraft) -> Dict:
        if self.dry_run:
            logger.info("[DRY RUN] Would update product %s (ID %s)", draft.sku, product_id)
            return {"id": product_id}
        product = self.store.update_product(product_id, draft.to_payload())
        logger.info("Updated product %s (ID %s)", draft.sku, product_id)
        return product

    def upsert(self, draft: StorefrontProductDraft) -> Tuple[Dict, str, bool]:
        """
        Write the draft to Shopify.

        Returns:
            (product, status, stale_reference)

        Raises:
            ShopifyAPIError: search, verify (other than 404), create or update failed
        """
        variants = self.store.find_variants_by_sku(draft.sku)
        if not variants:
            return self._create(draft), STATUS_CREATED, False

        product_id = variants[0].get("product_id")
        try:
            self.store.get_product(product_id)
        except ShopifyNotFoundError:
            # Variant index still points at a deleted product
            logger.warning("Product %s for SKU %s no longer exists, creating a new one",
                           product_id, draft.sku)
            return self._create(draft), STATUS_CREATED, True

        return self._update(product_id, draft), STATUS_UPDATED, False

    def reconcile(
        self,
        record: SupplierCatalogueRecord,
        inventory: SupplierInventoryRecord,
    ) -> ProductResult:
        """
        Process one eligible record. Never raises; failures come back as
        a result with status 'errore' and the remote error payload.
        """
        sku = record.manufacturer_item_code
        try:
            draft = build_product_draft(record, inventory, self.processor)
            product, status, stale = self.upsert(draft)
        except Exception as e:
            logger.error("Error processing product %s: %s", sku, e)
            return ProductResult(
                sku=sku,
                title=record.item_description,
                status=STATUS_ERROR,
                error=describe_error(e),
            )

        product_id = product.get("id")
        result = ProductResult(
            sku=sku,
            title=draft.title,
            status=status,
            product_id=product_id,
            vendor=draft.vendor,
            product_type=draft.product_type,
            price=draft.variant.price,
            cost=draft.variant.cost,
            barcode=draft.variant.barcode,
            inventory_quantity=draft.variant.inventory_quantity,
            weight=draft.variant.weight,
            stale_reference=stale,
        )

        if self.relocator and draft.image_urls:
            if product_id:
                result.images = self._relocate_images(draft, product_id)
            elif self.dry_run:
                logger.info("[DRY RUN] %d images would be uploaded for %s", len(draft.image_urls), sku)

        return result

    def _relocate_images(self, draft: StorefrontProductDraft, product_id) -> List[ImageUploadResult]:
        """Attach the draft's images; an unexpected error fails the images, not the product."""
        try:
            return self.relocator.relocate_all(draft.image_urls, product_id)
        except Exception as e:
            logger.error("Image processing failed for %s: %s", draft.sku, e)
            attempted = draft.image_urls[:self.relocator.MAX_IMAGES_PER_PRODUCT]
            return [ImageUploadResult(url, False, error=str(e)) for url in attempted]

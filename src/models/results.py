"""
Result models.

Values returned by the processing steps (description cleanup, image
uploads, product reconciliation) and the run summary they are merged into.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

STATUS_CREATED = "created"
STATUS_UPDATED = "updated"
STATUS_ERROR = "errore"


@dataclass
class ExtractionStats:
    """Counters describing what the description cleanup found and removed."""
    images_found: int = 0
    images_removed: int = 0
    videos_found: int = 0
    videos_removed: int = 0
    original_length: int = 0
    cleaned_length: int = 0
    comparison_section_removed: bool = False


@dataclass
class ImageExtractionResult:
    image_urls: List[str] = field(default_factory=list)
    cleaned_html: str = ""
    stats: ExtractionStats = field(default_factory=ExtractionStats)


@dataclass
class ImageUploadResult:
    """Outcome of attaching one image to a Shopify product."""
    source_url: str
    success: bool
    method: str = ""                    # "direct" or "relay"
    filename: str = ""
    shopify_image_id: Optional[int] = None
    error: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ProductResult:
    """Outcome of reconciling one catalogue record."""
    sku: str
    title: str
    status: str
    product_id: Optional[int] = None
    vendor: str = ""
    product_type: str = ""
    price: str = ""
    cost: str = ""
    barcode: str = ""
    inventory_quantity: int = 0
    weight: float = 0
    stale_reference: bool = False
    images: List[ImageUploadResult] = field(default_factory=list)
    error: Any = None

    @property
    def images_uploaded(self) -> int:
        return sum(1 for image in self.images if image.success)

    @property
    def images_failed(self) -> int:
        return sum(1 for image in self.images if not image.success)

    def to_dict(self) -> Dict[str, Any]:
        if self.status == STATUS_ERROR:
            return {
                "title": self.title,
                "sku": self.sku,
                "status": self.status,
                "error": self.error,
            }
        data = asdict(self)
        data.pop("error")
        data["images"] = [image.to_dict() for image in self.images]
        data["images_uploaded"] = self.images_uploaded
        data["images_failed"] = self.images_failed
        return data


@dataclass
class ImportRunSummary:
    """
    Accumulates the outcome of one import run.

    Created at run start, merged into by the orchestrator as each candidate
    is reconciled, serialized at run end. Never persisted.
    """
    imported: int = 0
    updated: int = 0
    skipped: int = 0
    skipped_no_inventory: int = 0
    skipped_zero_stock: int = 0
    failed: int = 0
    images_processed: int = 0
    images_uploaded: int = 0
    images_failed: int = 0
    errors: List[Dict[str, Any]] = field(default_factory=list)
    results: List[ProductResult] = field(default_factory=list)
    duration: int = 0

    def record_skip_no_inventory(self) -> None:
        self.skipped += 1
        self.skipped_no_inventory += 1

    def record_skip_zero_stock(self) -> None:
        self.skipped += 1
        self.skipped_zero_stock += 1

    def record_result(self, result: ProductResult) -> None:
        """Merge a reconciled product (success or failure) into the summary."""
        self.results.append(result)

        if result.status == STATUS_CREATED:
            self.imported += 1
        elif result.status == STATUS_UPDATED:
            self.updated += 1
        else:
            self.failed += 1
            self.errors.append({"sku": result.sku, "error": result.error})

        for image in result.images:
            self.images_processed += 1
            if image.success:
                self.images_uploaded += 1
            else:
                self.images_failed += 1
                self.errors.append({
                    "sku": result.sku,
                    "image": image.source_url,
                    "error": image.error,
                })

    @property
    def processed(self) -> int:
        return self.imported + self.updated + self.failed

    def counters(self) -> Dict[str, int]:
        return {
            "imported": self.imported,
            "updated": self.updated,
            "skipped": self.skipped,
            "skipped_no_inventory": self.skipped_no_inventory,
            "skipped_zero_stock": self.skipped_zero_stock,
            "failed": self.failed,
            "images_processed": self.images_processed,
            "images_uploaded": self.images_uploaded,
            "images_failed": self.images_failed,
        }

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = self.counters()
        data["errors"] = list(self.errors)
        return data

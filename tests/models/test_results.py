"""Tests for src/models/results.py"""

from src.models import (
    STATUS_CREATED,
    STATUS_ERROR,
    STATUS_UPDATED,
    ImageUploadResult,
    ImportRunSummary,
    ProductResult,
)


def _image(success, url="https://cdn.shopify.com/a.jpg"):
    return ImageUploadResult(url, success, "direct", "a_1.jpg",
                             error="" if success else "HTTP 422")


class TestProductResult:
    def test_image_counters(self):
        result = ProductResult("S", "T", STATUS_CREATED, images=[_image(True), _image(False), _image(True)])
        assert result.images_uploaded == 2
        assert result.images_failed == 1

    def test_error_dict_is_short(self):
        result = ProductResult("S", "T", STATUS_ERROR, error={"errors": "boom"})
        assert result.to_dict() == {"title": "T", "sku": "S", "status": "errore", "error": {"errors": "boom"}}

    def test_success_dict(self):
        result = ProductResult("S", "T", STATUS_UPDATED, product_id=9, price="122.00",
                               images=[_image(True)])
        data = result.to_dict()

        assert data["product_id"] == 9
        assert data["status"] == "updated"
        assert data["images_uploaded"] == 1
        assert data["images"][0]["method"] == "direct"
        assert "error" not in data


class TestImportRunSummary:
    def test_skips(self):
        summary = ImportRunSummary()
        summary.record_skip_no_inventory()
        summary.record_skip_zero_stock()
        summary.record_skip_zero_stock()

        assert summary.skipped == 3
        assert summary.skipped_no_inventory == 1
        assert summary.skipped_zero_stock == 2

    def test_record_results(self):
        summary = ImportRunSummary()
        summary.record_result(ProductResult("A", "A", STATUS_CREATED, images=[_image(True), _image(False)]))
        summary.record_result(ProductResult("B", "B", STATUS_UPDATED))
        summary.record_result(ProductResult("C", "C", STATUS_ERROR, error="HTTP 500"))

        assert summary.imported == 1
        assert summary.updated == 1
        assert summary.failed == 1
        assert summary.processed == 3
        assert summary.images_processed == 2
        assert summary.images_uploaded == 1
        assert summary.images_failed == 1
        assert {"sku": "C", "error": "HTTP 500"} in summary.errors
        assert {"sku": "A", "image": "https://cdn.shopify.com/a.jpg", "error": "HTTP 422"} in summary.errors

    def test_to_dict(self):
        summary = ImportRunSummary()
        summary.record_skip_zero_stock()
        data = summary.to_dict()

        assert data["skipped_zero_stock"] == 1
        assert data["errors"] == []
        assert "results" not in data

"""
Data models for the Senetic to Shopify import.

This module contains pure data classes with no I/O.
"""

from .product import (
    StorefrontProductDraft,
    StorefrontVariant,
    SupplierCatalogueRecord,
    SupplierInventoryRecord,
)
from .results import (
    STATUS_CREATED,
    STATUS_ERROR,
    STATUS_UPDATED,
    ExtractionStats,
    ImageExtractionResult,
    ImageUploadResult,
    ImportRunSummary,
    ProductResult,
)

__all__ = [
    'SupplierInventoryRecord',
    'SupplierCatalogueRecord',
    'StorefrontVariant',
    'StorefrontProductDraft',
    'ExtractionStats',
    'ImageExtractionResult',
    'ImageUploadResult',
    'ProductResult',
    'ImportRunSummary',
    'STATUS_CREATED',
    'STATUS_UPDATED',
    'STATUS_ERROR',
]

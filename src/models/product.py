"""
Product data models.

Pure data classes for supplier feed records and the Shopify product
payload built from them. No I/O - only data structure definitions and
the field mapping between the two sides.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def _mapping(value: Any) -> Dict[str, Any]:
    """Return value if it is a JSON object, else an empty dict."""
    return value if isinstance(value, dict) else {}


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _number(value: Any) -> Optional[float]:
    """Coerce a feed value to float, treating blanks and garbage as missing."""
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


@dataclass
class SupplierInventoryRecord:
    """Inventory line from the Senetic InventoryReportGet feed."""
    manufacturer_item_code: str
    stock_schedules: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def available_quantity(self) -> int:
        """Sum of targetStock over all stock schedules (missing counts as 0)."""
        total = 0
        for schedule in self.stock_schedules or []:
            if isinstance(schedule, dict):
                total += int(_number(schedule.get("targetStock")) or 0)
        return total

    @classmethod
    def from_feed_line(cls, line: Dict[str, Any]) -> "SupplierInventoryRecord":
        availability = _mapping(line.get("availability"))
        schedules = availability.get("stockSchedules")
        if not isinstance(schedules, list):
            schedules = []
        return cls(
            manufacturer_item_code=_text(line.get("manufacturerItemCode")),
            stock_schedules=schedules,
        )


@dataclass
class SupplierCatalogueRecord:
    """Catalogue line from the Senetic ProductCatalogueGet feed."""
    manufacturer_item_code: str
    item_description: str = ""
    long_item_description: str = ""     # HTML, entity-encoded
    brand_name: str = ""                # productPrimaryBrand.brandNodeName
    category_name: str = ""             # productSecondaryCategory.categoryNodeName
    unit_retail_price: Optional[float] = None
    unit_net_price: Optional[float] = None
    tax_rate: Optional[float] = None    # percent, e.g. 22
    ean: str = ""
    weight: Optional[float] = None      # kg

    @classmethod
    def from_feed_line(cls, line: Dict[str, Any]) -> "SupplierCatalogueRecord":
        brand = _mapping(line.get("productPrimaryBrand"))
        category = _mapping(line.get("productSecondaryCategory"))
        ean = line.get("ean")
        return cls(
            manufacturer_item_code=_text(line.get("manufacturerItemCode")),
            item_description=_text(line.get("itemDescription")),
            long_item_description=_text(line.get("longItemDescription")),
            brand_name=_text(brand.get("brandNodeName")),
            category_name=_text(category.get("categoryNodeName")),
            unit_retail_price=_number(line.get("unitRetailPrice")),
            unit_net_price=_number(line.get("unitNetPrice")),
            tax_rate=_number(line.get("taxRate")),
            ean=str(ean) if ean else "",
            weight=_number(line.get("weight")),
        )


@dataclass
class StorefrontVariant:
    """The single Shopify variant of an imported product."""
    sku: str
    price: str
    cost: str = "0.00"
    barcode: str = ""
    inventory_quantity: int = 0
    inventory_management: str = "shopify"
    weight: float = 0
    weight_unit: str = "kg"

    def to_payload(self) -> Dict[str, Any]:
        return {
            "price": self.price,
            "cost": self.cost,
            "sku": self.sku,
            "barcode": self.barcode,
            "inventory_quantity": self.inventory_quantity,
            "inventory_management": self.inventory_management,
            "weight": self.weight,
            "weight_unit": self.weight_unit,
        }


@dataclass
class StorefrontProductDraft:
    """
    Shopify product composed from a matched (catalogue, inventory) pair.

    Transient: built per candidate, sent as the create/update body, then
    discarded. image_urls holds the images extracted from the description,
    which are attached after the product exists.
    """
    title: str
    body_html: str
    vendor: str
    product_type: str
    variant: StorefrontVariant
    image_urls: List[str] = field(default_factory=list)

    @property
    def sku(self) -> str:
        return self.variant.sku

    def to_payload(self) -> Dict[str, Any]:
        """Request body for POST products.json / PUT products/{id}.json."""
        return {
            "product": {
                "title": self.title,
                "body_html": self.body_html,
                "vendor": self.vendor,
                "product_type": self.product_type,
                "variants": [self.variant.to_payload()],
            }
        }

"""
Product draft builder.

Maps a matched (catalogue, inventory) pair to the Shopify product payload.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..content.description_cleaner import DescriptionProcessor
from ..models import (
    StorefrontProductDraft,
    StorefrontVariant,
    SupplierCatalogueRecord,
    SupplierInventoryRecord,
)

ZERO_PRICE = "0.00"
_CENTS = Decimal("0.01")


def compute_price(unit_retail_price: Optional[float], tax_rate: Optional[float]) -> str:
    """
    Gross price: retail price plus VAT, rounded to cents.

    Example:
        compute_price(100, 22) -> '122.00'
        compute_price(None, 22) -> '0.00'
    """
    if not unit_retail_price:
        return ZERO_PRICE
    retail = Decimal(str(unit_retail_price))
    rate = Decimal(str(tax_rate)) if tax_rate else Decimal(0)
    gross = retail * (1 + rate / 100)
    return str(gross.quantize(_CENTS, rounding=ROUND_HALF_UP))


def format_cost(unit_net_price: Optional[float]) -> str:
    """Net purchase price as a string, '0.00' when missing."""
    if not unit_net_price:
        return ZERO_PRICE
    return str(unit_net_price)


def build_product_draft(
    catalogue: SupplierCatalogueRecord,
    inventory: SupplierInventoryRecord,
    processor: DescriptionProcessor,
) -> StorefrontProductDraft:
    """
    Compose the Shopify product for a catalogue record.

    The long description is cleaned and its images extracted; the images
    are attached once the product exists.
    """
    description = processor.process(catalogue.long_item_description)

    variant = StorefrontVariant(
        sku=catalogue.manufacturer_item_code,
        price=compute_price(catalogue.unit_retail_price, catalogue.tax_rate),
        cost=format_cost(catalogue.unit_net_price),
        barcode=catalogue.ean,
        inventory_quantity=inventory.available_quantity,
        weight=catalogue.weight or 0,
    )

    return StorefrontProductDraft(
        title=catalogue.item_description,
        body_html=description.cleaned_html,
        vendor=catalogue.brand_name,
        product_type=catalogue.category_name,
        variant=variant,
        image_urls=description.image_urls,
    )

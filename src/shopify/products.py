"""
Shopify Product Store

Product, variant and image operations used by the import, on top of
ShopifyAPIClient.
"""

import logging
from collections import Counter
from typing import Dict, List, Optional, Union

from .api_client import ShopifyAPIClient

logger = logging.getLogger(__name__)

ProductId = Union[int, str]


class ShopifyProductStore:
    """
    Product CRUD and image attach for the import.

    Usage:
        store = ShopifyProductStore(client)
        variants = store.find_variants_by_sku("DS-2CD2143G2-I")
        product = store.create_product(draft.to_payload())
    """

    def __init__(self, client: ShopifyAPIClient):
        self.client = client

    def find_variants_by_sku(self, sku: str) -> List[Dict]:
        """
        Find variants whose SKU equals `sku` exactly.

        Shopify's sku filter can return near matches (prefix, different
        case); only exact string matches are kept.
        """
        result = self.client.rest_request("GET", "variants.json", params={"sku": sku})
        variants = result.get("variants") or []
        exact = [v for v in variants if v.get("sku") == sku]
        logger.debug("SKU %s: %d variants returned, %d exact", sku, len(variants), len(exact))
        return exact

    def get_product(self, product_id: ProductId) -> Dict:
        """
        Fetch a product.

        Raises:
            ShopifyNotFoundError: The product no longer exists
        """
        return self.client.rest_request("GET", f"products/{product_id}.json").get("product", {})

    def create_product(self, payload: Dict) -> Dict:
        """Create a product from a {"product": {...}} payload."""
        return self.client.rest_request("POST", "products.json", data=payload).get("product", {})

    def update_product(self, product_id: ProductId, payload: Dict) -> Dict:
        """Update a product in place from a {"product": {...}} payload."""
        return self.client.rest_request("PUT", f"products/{product_id}.json", data=payload).get("product", {})

    def add_image(self, product_id: ProductId, src: str, filename: Optional[str] = None,
                  alt: Optional[str] = None) -> Dict:
        """
        Attach an image to a product. Shopify fetches `src` itself.

        Args:
            product_id: Target product
            src: Publicly reachable image URL
            filename: Name Shopify stores the file under
            alt: Alt text
        """
        image: Dict = {"src": src}
        if filename:
            image["filename"] = filename
        if alt:
            image["alt"] = alt
        return self.client.rest_request(
            "POST", f"products/{product_id}/images.json", data={"image": image}
        ).get("image", {})

    def list_product_images(self, product_id: ProductId) -> List[Dict]:
        return self.client.rest_request("GET", f"products/{product_id}/images.json").get("images") or []

    def list_products(self, limit: int = 250) -> List[Dict]:
        """First page of products (no pagination)."""
        return self.client.rest_request("GET", "products.json", params={"limit": limit}).get("products") or []

    def count_products_by_vendor(self) -> Dict:
        """
        Count products per vendor.

        Returns:
            {'total_products': n, 'vendor_counts': {...}, 'products_by_vendor': {...}}
        """
        products = self.list_products()
        vendor_counts: Counter = Counter()
        products_by_vendor: Dict[str, List[Dict]] = {}

        for product in products:
            vendor = product.get("vendor") or "Unknown"
            vendor_counts[vendor] += 1
            variants = product.get("variants") or []
            products_by_vendor.setdefault(vendor, []).append({
                "id": product.get("id"),
                "title": product.get("title"),
                "sku": variants[0].get("sku") if variants else None,
                "created_at": product.get("created_at"),
                "updated_at": product.get("updated_at"),
            })

        return {
            "total_products": len(products),
            "vendor_counts": dict(vendor_counts),
            "products_by_vendor": products_by_vendor,
        }

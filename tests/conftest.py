"""Shared test fixtures."""

import itertools

import pytest

from src.common.errors import ShopifyNotFoundError
from src.content.description_cleaner import DescriptionProcessor
from src.images.domains import DomainClassifier

DIRECT_HOSTS = ["cdn.shopify.com", "senetic.it", "images.senetic.com"]
RELAY_HOSTS = ["static.senetic.com"]


class FakeProductStore:
    """In-memory stand-in for ShopifyProductStore that records every call."""

    def __init__(self):
        self.variants = {}        # sku -> list of variant dicts (as Shopify returns them)
        self.products = {}        # product id -> product dict
        self.images = {}          # product id -> list of image dicts
        self.calls = []
        self.fail_on = {}         # method name -> exception to raise
        self._ids = itertools.count(1001)

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        if name in self.fail_on:
            raise self.fail_on[name]

    def call_names(self):
        return [call[0] for call in self.calls]

    def find_variants_by_sku(self, sku):
        self._record("find_variants_by_sku", sku)
        return [v for v in self.variants.get(sku, []) if v.get("sku") == sku]

    def get_product(self, product_id):
        self._record("get_product", product_id)
        if product_id not in self.products:
            raise ShopifyNotFoundError(f"Not found: products/{product_id}.json", status_code=404,
                                       payload={"errors": "Not Found"})
        return self.products[product_id]

    def create_product(self, payload):
        self._record("create_product", payload)
        product_id = next(self._ids)
        product = dict(payload["product"], id=product_id)
        self.products[product_id] = product
        return product

    def update_product(self, product_id, payload):
        self._record("update_product", product_id, payload)
        product = dict(payload["product"], id=product_id)
        self.products[product_id] = product
        return product

    def add_image(self, product_id, src, filename=None, alt=None):
        self._record("add_image", product_id, src, filename)
        image = {"id": next(self._ids), "src": src, "filename": filename}
        self.images.setdefault(product_id, []).append(image)
        return image

    def list_product_images(self, product_id):
        self._record("list_product_images", product_id)
        return list(self.images.get(product_id, []))


@pytest.fixture
def classifier():
    return DomainClassifier(direct=DIRECT_HOSTS, relay=RELAY_HOSTS)


@pytest.fixture
def processor(classifier):
    return DescriptionProcessor(classifier, base_url="https://www.senetic.it/")


@pytest.fixture
def fake_store():
    return FakeProductStore()


@pytest.fixture
def catalogue_line():
    """A Senetic catalogue line as returned by ProductCatalogueGet."""
    return {
        "manufacturerItemCode": "UAP-AC-PRO",
        "itemDescription": "Ubiquiti UniFi AP AC Pro",
        "longItemDescription": (
            "&lt;p&gt;Access point dual band.&lt;/p&gt;"
            "&lt;img src=&quot;https://images.senetic.com/uap-ac-pro.jpg&quot;&gt;"
        ),
        "productPrimaryBrand": {"brandNodeName": "Ubiquiti"},
        "productSecondaryCategory": {"categoryNodeName": "Reti"},
        "unitRetailPrice": 100,
        "unitNetPrice": 80.5,
        "taxRate": 22,
        "ean": 810354022572,
        "weight": "0.35",
    }


@pytest.fixture
def inventory_line():
    """A Senetic inventory line as returned by InventoryReportGet."""
    return {
        "manufacturerItemCode": "UAP-AC-PRO",
        "availability": {
            "stockSchedules": [
                {"targetStock": 3},
                {"targetStock": 2},
            ]
        },
    }

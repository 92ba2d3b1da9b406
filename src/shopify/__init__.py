"""
Shopify integration modules.

Modules:
    api_client - REST client for Shopify Admin API with typed errors
    products   - Product/variant lookup, create/update and image attach
"""

from .api_client import ShopifyAPIClient
from .products import ShopifyProductStore

__all__ = [
    'ShopifyAPIClient',
    'ShopifyProductStore',
]

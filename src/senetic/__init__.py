"""
Senetic B2B feed access.

Modules:
    api_client - Inventory and catalogue report client
"""

from .api_client import CATALOGUE_FEED, INVENTORY_FEED, SeneticAPIClient

__all__ = [
    'SeneticAPIClient',
    'INVENTORY_FEED',
    'CATALOGUE_FEED',
]

"""
Senetic -> Shopify reconciliation.

Modules:
    inventory  - Inventory index by manufacturer item code
    filters    - Category/brand filter
    drafts     - Catalogue record -> Shopify product payload
    reconciler - Create / update / stale-recreate per product
    importer   - Run orchestration
    health     - Upstream connectivity check
"""

from .drafts import build_product_draft, compute_price
from .filters import FilterCriteria, filter_catalogue
from .health import check_health
from .importer import ImportOrchestrator
from .inventory import build_inventory_index
from .reconciler import CandidateState, CatalogueReconciler, classify_candidate

__all__ = [
    'build_product_draft',
    'compute_price',
    'FilterCriteria',
    'filter_catalogue',
    'check_health',
    'ImportOrchestrator',
    'build_inventory_index',
    'CandidateState',
    'CatalogueReconciler',
    'classify_candidate',
]

"""
Catalogue filters.

Selects the catalogue records to import by secondary category and,
optionally, by brand.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..common.config_loader import load_filter_config
from ..common.text_utils import normalize_key, normalize_keys
from ..models import SupplierCatalogueRecord

logger = logging.getLogger(__name__)


@dataclass
class FilterCriteria:
    """
    Accepted categories and brands.

    brands=None accepts every brand. Names are compared after trimming and
    case-folding.
    """
    categories: List[str] = field(default_factory=list)
    brands: Optional[List[str]] = None

    @classmethod
    def from_config(cls) -> "FilterCriteria":
        config = load_filter_config()
        return cls(categories=config['categories'], brands=config['brands'])

    def matches(self, record: SupplierCatalogueRecord) -> bool:
        category = normalize_key(record.category_name)
        if not category or category not in normalize_keys(self.categories):
            return False
        if self.brands is None:
            return True
        brand = normalize_key(record.brand_name)
        return bool(brand) and brand in normalize_keys(self.brands)


def filter_catalogue(
    records: Iterable[SupplierCatalogueRecord],
    criteria: FilterCriteria,
) -> List[SupplierCatalogueRecord]:
    """Keep the records matching the criteria, preserving feed order."""
    selected = [record for record in records if criteria.matches(record)]

    logger.info("Filtered to %d products matching criteria", len(selected))
    return selected

"""
Inventory index.

Joins the Senetic inventory feed to catalogue records by manufacturer
item code.
"""

import logging
from typing import Any, Dict, Iterable

from ..models import SupplierInventoryRecord

logger = logging.getLogger(__name__)

InventoryIndex = Dict[str, SupplierInventoryRecord]


def build_inventory_index(lines: Iterable[Dict[str, Any]]) -> InventoryIndex:
    """
    Map manufacturer item code -> inventory record.

    Lines without a code are ignored; when a code appears twice the last
    line wins.
    """
    index: InventoryIndex = {}
    for line in lines:
        if not isinstance(line, dict):
            logger.warning("Skipping malformed inventory line: %.80r", line)
            continue
        record = SupplierInventoryRecord.from_feed_line(line)
        if record.manufacturer_item_code:
            index[record.manufacturer_item_code] = record

    logger.info("Created inventory map with %d items", len(index))
    return index

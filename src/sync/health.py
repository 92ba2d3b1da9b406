"""
Connectivity health check for the two upstream services.
"""

import logging
import platform
from typing import Any, Dict

from ..common.errors import FeedFetchError, ShopifyAPIError
from ..senetic.api_client import INVENTORY_FEED, SeneticAPIClient
from ..shopify.api_client import ShopifyAPIClient

logger = logging.getLogger(__name__)

PROBE_TIMEOUT = 5

STATUS_CONNECTED = "connected"
STATUS_DISCONNECTED = "disconnected"
STATUS_HEALTHY = "healthy"
STATUS_DEGRADED = "degraded"


def check_health(shopify: ShopifyAPIClient, senetic: SeneticAPIClient,
                 timeout: int = PROBE_TIMEOUT) -> Dict[str, Any]:
    """
    Probe Shopify (shop.json) and Senetic (inventory report).

    Returns:
        {'status': 'healthy'|'degraded', 'services': {...}, 'environment': {...}}
    """
    services = {}

    try:
        shopify.get_shop(timeout=timeout)
        services["shopify"] = {"status": STATUS_CONNECTED, "error": None}
        logger.info("Shopify connection: OK")
    except ShopifyAPIError as e:
        services["shopify"] = {"status": STATUS_DISCONNECTED, "error": str(e)}
        logger.warning("Shopify connection: FAILED (%s)", e)

    try:
        senetic.fetch_report(INVENTORY_FEED, timeout=timeout)
        services["senetic"] = {"status": STATUS_CONNECTED, "error": None}
        logger.info("Senetic connection: OK")
    except FeedFetchError as e:
        services["senetic"] = {"status": STATUS_DISCONNECTED, "error": str(e)}
        logger.warning("Senetic connection: FAILED (%s)", e)

    healthy = all(s["status"] == STATUS_CONNECTED for s in services.values())
    return {
        "status": STATUS_HEALTHY if healthy else STATUS_DEGRADED,
        "services": services,
        "environment": {
            "python_version": platform.python_version(),
            "platform": platform.platform(),
        },
    }

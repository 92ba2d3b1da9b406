"""
Senetic API Client

Read-only client for the Senetic B2B ClientApi inventory and catalogue
reports. Both endpoints return a single page shaped {"lines": [...]}.
"""

import logging
from typing import Any, Dict, List

import requests

from ..common.errors import FeedFetchError
from ..common.settings import SENETIC_BASE_URL

logger = logging.getLogger(__name__)

INVENTORY_FEED = "inventory"
CATALOGUE_FEED = "catalogue"

_ENDPOINTS = {
    INVENTORY_FEED: "InventoryReportGet",
    CATALOGUE_FEED: "ProductCatalogueGet",
}


class SeneticAPIClient:
    """
    Client for the Senetic inventory and catalogue feeds.

    Usage:
        client = SeneticAPIClient(auth="Basic xxx")
        inventory = client.fetch_inventory()     # list of raw lines
        catalogue = client.fetch_catalogue()
    """

    DEFAULT_TIMEOUT = 120

    def __init__(self, auth: str, base_url: str = SENETIC_BASE_URL, lang: str = "IT"):
        """
        Args:
            auth: Value forwarded as the Authorization header
            base_url: ClientApi base URL
            lang: Language of descriptions (LangId)
        """
        self.base_url = base_url.rstrip("/")
        self.lang = lang

        self.session = requests.Session()
        self.session.headers.update({
            "accept": "application/json",
            "Authorization": auth,
            "User-Agent": "Mozilla/5.0",
        })

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def _url(self, feed: str) -> str:
        return f"{self.base_url}/{_ENDPOINTS[feed]}"

    def fetch_report(self, feed: str, timeout: int = DEFAULT_TIMEOUT) -> Dict[str, Any]:
        """
        Fetch a raw feed payload.

        Args:
            feed: INVENTORY_FEED or CATALOGUE_FEED
            timeout: Request timeout in seconds

        Returns:
            Decoded JSON payload

        Raises:
            FeedFetchError: Network error, HTTP error or non-JSON body
        """
        params = {"UseItemCategoryFilter": "true", "LangId": self.lang}
        logger.info("Fetching Senetic %s...", feed)

        try:
            response = self.session.get(self._url(feed), params=params, timeout=timeout)
        except requests.exceptions.RequestException as e:
            raise FeedFetchError(feed, str(e)) from e

        if response.status_code >= 400:
            raise FeedFetchError(feed, f"HTTP {response.status_code}: {response.text[:200]}",
                                 status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise FeedFetchError(feed, "response is not JSON", status_code=response.status_code) from e

        if not isinstance(payload, dict):
            raise FeedFetchError(feed, "unexpected payload shape", status_code=response.status_code)
        return payload

    def fetch_lines(self, feed: str, timeout: int = DEFAULT_TIMEOUT) -> List[Dict[str, Any]]:
        lines = self.fetch_report(feed, timeout=timeout).get("lines") or []
        logger.info("Found %d %s items", len(lines), feed)
        return lines

    def fetch_inventory(self) -> List[Dict[str, Any]]:
        return self.fetch_lines(INVENTORY_FEED)

    def fetch_catalogue(self) -> List[Dict[str, Any]]:
        return self.fetch_lines(CATALOGUE_FEED)


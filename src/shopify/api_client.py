"""
Shopify API Client

Thin client for the Shopify Admin REST API.
Handles authentication and turns HTTP failures into typed errors.

There are no retries: the import paces its calls and treats a failed call
as a failure of the product or image being processed.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests

from ..common.errors import ShopifyAPIError, ShopifyNotFoundError

logger = logging.getLogger(__name__)


class ShopifyAPIClient:
    """
    Client for Shopify Admin REST API.

    Usage:
        client = ShopifyAPIClient(shop="my-store", access_token="shpat_xxx")

        result = client.rest_request("GET", "products.json", params={"limit": 250})

    Errors:
        ShopifyNotFoundError on 404, ShopifyAPIError on any other HTTP error
        or network failure. Both carry status_code and the decoded payload.
    """

    API_VERSION = "2024-04"
    DEFAULT_TIMEOUT = 30

    def __init__(self, shop: str, access_token: str):
        """
        Initialize the API client.

        Args:
            shop: Shop name (without .myshopify.com), full domain or store URL
            access_token: Shopify Admin API access token
        """
        # Normalize shop name
        if ".myshopify.com" in shop:
            self.shop = shop.replace("https://", "").replace("http://", "").split(".myshopify.com")[0]
        else:
            self.shop = shop.replace("https://", "").replace("http://", "").strip("/")

        self.access_token = access_token
        self.base_url = f"https://{self.shop}.myshopify.com/admin/api/{self.API_VERSION}"

        self.session = requests.Session()
        self.session.headers.update({
            "X-Shopify-Access-Token": access_token,
            "Content-Type": "application/json",
        })

        self.requests_made = 0

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    @staticmethod
    def _error_payload(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text[:500]

    def rest_request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict] = None,
        params: Optional[Dict] = None,
        timeout: int = DEFAULT_TIMEOUT
    ) -> Dict:
        """
        Make a REST API request.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: API endpoint (e.g., "products.json")
            data: Request body for POST/PUT
            params: Query string parameters
            timeout: Request timeout in seconds

        Returns:
            Response JSON (empty dict for empty bodies)

        Raises:
            ShopifyNotFoundError: Resource does not exist (404)
            ShopifyAPIError: Any other HTTP error, network failure or non-JSON body
        """
        url = urljoin(self.base_url + "/", endpoint)
        self.requests_made += 1

        try:
            if method == "GET":
                response = self.session.get(url, params=params, timeout=timeout)
            elif method == "POST":
                response = self.session.post(url, json=data, params=params, timeout=timeout)
            elif method == "PUT":
                response = self.session.put(url, json=data, params=params, timeout=timeout)
            elif method == "DELETE":
                response = self.session.delete(url, params=params, timeout=timeout)
            else:
                raise ValueError(f"Unsupported method: {method}")

        except requests.exceptions.Timeout as e:
            logger.error("Request timeout: %s %s", method, endpoint)
            raise ShopifyAPIError(f"Timeout on {method} {endpoint}") from e
        except requests.exceptions.RequestException as e:
            logger.error("Request failed: %s", e)
            raise ShopifyAPIError(f"{method} {endpoint} failed: {e}") from e

        if response.status_code == 404:
            raise ShopifyNotFoundError(
                f"Not found: {endpoint}",
                status_code=404,
                payload=self._error_payload(response),
            )

        if response.status_code >= 400:
            payload = self._error_payload(response)
            logger.error("API Error %d on %s %s: %s", response.status_code, method, endpoint, payload)
            raise ShopifyAPIError(
                f"HTTP {response.status_code} on {method} {endpoint}",
                status_code=response.status_code,
                payload=payload,
            )

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            logger.error("Non-JSON response on %s %s: %s", method, endpoint, response.text[:200])
            raise ShopifyAPIError(
                f"Invalid JSON in response to {method} {endpoint}",
                status_code=response.status_code,
                payload=response.text[:500],
            ) from e

    def get_shop(self, timeout: int = DEFAULT_TIMEOUT) -> Dict:
        """Fetch shop info."""
        return self.rest_request("GET", "shop.json", timeout=timeout).get("shop", {})


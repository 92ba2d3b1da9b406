"""Tests for src/sync/health.py"""

from unittest.mock import MagicMock

from src.common.errors import FeedFetchError, ShopifyAPIError
from src.sync.health import check_health


def _clients():
    shopify = MagicMock()
    shopify.get_shop.return_value = {"name": "Proomnibus"}
    senetic = MagicMock()
    senetic.fetch_report.return_value = {"lines": []}
    return shopify, senetic


class TestCheckHealth:
    def test_healthy(self):
        shopify, senetic = _clients()

        report = check_health(shopify, senetic)

        assert report["status"] == "healthy"
        assert report["services"]["shopify"] == {"status": "connected", "error": None}
        assert report["services"]["senetic"] == {"status": "connected", "error": None}
        assert "python_version" in report["environment"]
        shopify.get_shop.assert_called_once_with(timeout=5)

    def test_shopify_down(self):
        shopify, senetic = _clients()
        shopify.get_shop.side_effect = ShopifyAPIError("HTTP 401", status_code=401)

        report = check_health(shopify, senetic)

        assert report["status"] == "degraded"
        assert report["services"]["shopify"] == {"status": "disconnected", "error": "HTTP 401"}
        assert report["services"]["senetic"]["status"] == "connected"

    def test_senetic_down(self):
        shopify, senetic = _clients()
        senetic.fetch_report.side_effect = FeedFetchError("inventory", "HTTP 500", status_code=500)

        report = check_health(shopify, senetic)

        assert report["status"] == "degraded"
        assert report["services"]["senetic"]["status"] == "disconnected"

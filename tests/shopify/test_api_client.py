"""Tests for src/shopify/api_client.py"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from src.common.errors import ShopifyAPIError, ShopifyNotFoundError
from src.shopify.api_client import ShopifyAPIClient


@pytest.fixture
def client():
    return ShopifyAPIClient(shop="test-store", access_token="shpat_test")


def _response(status_code, body=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    if body is None:
        response.content = b""
        response.json.side_effect = ValueError("No JSON")
    else:
        response.content = b"{...}"
        response.json.return_value = body
    return response


class TestInit:
    def test_normalizes_shop_name(self):
        c = ShopifyAPIClient(shop="test-store", access_token="tok")
        assert c.shop == "test-store"

    def test_normalizes_full_domain(self):
        c = ShopifyAPIClient(shop="test-store.myshopify.com", access_token="tok")
        assert c.shop == "test-store"

    def test_normalizes_full_url(self):
        c = ShopifyAPIClient(shop="https://test-store.myshopify.com/", access_token="tok")
        assert c.shop == "test-store"

    def test_base_url(self, client):
        assert client.base_url == "https://test-store.myshopify.com/admin/api/2024-04"

    def test_session_headers(self, client):
        assert client.session.headers["X-Shopify-Access-Token"] == "shpat_test"
        assert client.session.headers["Content-Type"] == "application/json"


class TestRestRequest:
    def test_successful_get(self, client):
        with patch.object(client.session, "get", return_value=_response(200, {"shop": {"name": "Test"}})) as get:
            result = client.rest_request("GET", "shop.json")

        assert result == {"shop": {"name": "Test"}}
        assert get.call_args[0][0] == "https://test-store.myshopify.com/admin/api/2024-04/shop.json"

    def test_successful_post(self, client):
        with patch.object(client.session, "post", return_value=_response(201, {"product": {"id": 123}})) as post:
            result = client.rest_request("POST", "products.json", {"product": {"title": "X"}})

        assert result == {"product": {"id": 123}}
        assert post.call_args[1]["json"] == {"product": {"title": "X"}}

    def test_successful_put(self, client):
        with patch.object(client.session, "put", return_value=_response(200, {"product": {"id": 5}})):
            result = client.rest_request("PUT", "products/5.json", {"product": {}})

        assert result == {"product": {"id": 5}}

    def test_empty_body_returns_empty_dict(self, client):
        with patch.object(client.session, "delete", return_value=_response(200)):
            assert client.rest_request("DELETE", "products/5.json") == {}

    def test_404_raises_not_found(self, client):
        response = _response(404, {"errors": "Not Found"})
        with patch.object(client.session, "get", return_value=response):
            with pytest.raises(ShopifyNotFoundError) as exc_info:
                client.rest_request("GET", "products/999.json")

        assert exc_info.value.status_code == 404
        assert exc_info.value.payload == {"errors": "Not Found"}

    def test_422_raises_with_payload(self, client):
        response = _response(422, {"errors": {"title": ["can't be blank"]}})
        with patch.object(client.session, "post", return_value=response):
            with pytest.raises(ShopifyAPIError) as exc_info:
                client.rest_request("POST", "products.json", {"product": {}})

        assert not isinstance(exc_info.value, ShopifyNotFoundError)
        assert exc_info.value.status_code == 422
        assert exc_info.value.payload == {"errors": {"title": ["can't be blank"]}}

    def test_non_json_error_keeps_text(self, client):
        response = _response(502, text="Bad Gateway")
        with patch.object(client.session, "get", return_value=response):
            with pytest.raises(ShopifyAPIError) as exc_info:
                client.rest_request("GET", "shop.json")

        assert exc_info.value.payload == "Bad Gateway"

    def test_non_json_success_body_raises(self, client):
        response = _response(200, text="<html>Gateway page</html>")
        response.content = b"<html>Gateway page</html>"
        with patch.object(client.session, "post", return_value=response):
            with pytest.raises(ShopifyAPIError, match="Invalid JSON") as exc_info:
                client.rest_request("POST", "products/1/images.json", {"image": {}})

        assert exc_info.value.status_code == 200
        assert exc_info.value.payload == "<html>Gateway page</html>"

    def test_429_is_not_retried(self, client):
        response = _response(429, {"errors": "Exceeded 2 calls per second"})
        with patch.object(client.session, "get", return_value=response) as get:
            with pytest.raises(ShopifyAPIError):
                client.rest_request("GET", "shop.json")

        assert get.call_count == 1

    def test_timeout_raises(self, client):
        with patch.object(client.session, "get", side_effect=requests.exceptions.Timeout):
            with pytest.raises(ShopifyAPIError, match="Timeout"):
                client.rest_request("GET", "shop.json")

    def test_connection_error_raises(self, client):
        with patch.object(client.session, "get", side_effect=requests.exceptions.ConnectionError("refused")):
            with pytest.raises(ShopifyAPIError) as exc_info:
                client.rest_request("GET", "shop.json")

        assert exc_info.value.status_code is None

    def test_unsupported_method_raises(self, client):
        with pytest.raises(ValueError, match="Unsupported method"):
            client.rest_request("PATCH", "shop.json")

    def test_counts_requests(self, client):
        with patch.object(client.session, "get", return_value=_response(200, {})):
            client.rest_request("GET", "shop.json")
            client.rest_request("GET", "shop.json")

        assert client.requests_made == 2


class TestGetShop:
    def test_returns_shop(self, client):
        with patch.object(client.session, "get", return_value=_response(200, {"shop": {"name": "Proomnibus"}})):
            assert client.get_shop() == {"name": "Proomnibus"}

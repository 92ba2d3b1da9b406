"""Tests for src/notifications/webhook.py"""

from unittest.mock import MagicMock, patch

import requests

from src.notifications.webhook import EVENT_PROGRESS, EVENT_STARTED, WebhookNotifier


class TestWebhookNotifier:
    def test_disabled_without_url(self):
        notifier = WebhookNotifier()
        with patch("src.notifications.webhook.requests.post") as post:
            assert notifier.notify_import_start({"source": "cli"}) is False
        post.assert_not_called()

    def test_posts_event(self):
        notifier = WebhookNotifier("https://hooks.example.com/import")
        with patch("src.notifications.webhook.requests.post", return_value=MagicMock()) as post:
            assert notifier.notify_import_start({"source": "cli"}) is True

        body = post.call_args[1]["json"]
        assert post.call_args[0][0] == "https://hooks.example.com/import"
        assert body["event"] == EVENT_STARTED
        assert body["data"] == {"source": "cli"}
        assert "timestamp" in body
        assert post.call_args[1]["headers"] == {"X-Webhook-Event": EVENT_STARTED}

    def test_progress_event(self):
        notifier = WebhookNotifier("https://hooks.example.com/import")
        with patch("src.notifications.webhook.requests.post", return_value=MagicMock()) as post:
            notifier.notify_import_progress({"current": 1, "total": 2})

        assert post.call_args[1]["json"]["event"] == EVENT_PROGRESS

    def test_delivery_failure_is_swallowed(self):
        notifier = WebhookNotifier("https://hooks.example.com/import")
        with patch("src.notifications.webhook.requests.post",
                   side_effect=requests.exceptions.ConnectionError("down")):
            assert notifier.notify_import_complete({}) is False

    def test_http_error_is_failure(self):
        response = MagicMock()
        response.raise_for_status.side_effect = requests.exceptions.HTTPError("500")
        notifier = WebhookNotifier("https://hooks.example.com/import")
        with patch("src.notifications.webhook.requests.post", return_value=response):
            assert notifier.notify_import_error({"error": "x"}) is False

"""
Import webhook notifier.

Posts import lifecycle events to an optional webhook URL so a dashboard
can follow a run. Delivery failures are logged and never affect the import.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

EVENT_STARTED = "import.started"
EVENT_PROGRESS = "import.progress"
EVENT_COMPLETED = "import.completed"
EVENT_ERROR = "import.error"


class WebhookNotifier:
    """
    Usage:
        notifier = WebhookNotifier("https://example.com/hooks/import")
        notifier.notify_import_start({"source": "cli"})
    """

    def __init__(self, webhook_url: Optional[str] = None, timeout: int = 10):
        self.webhook_url = webhook_url
        self.timeout = timeout

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)

    def send(self, event: str, data: Dict[str, Any]) -> bool:
        """
        Post an event.

        Returns:
            True if delivered (False when disabled or delivery failed)
        """
        if not self.enabled:
            return False

        body = {
            "event": event,
            "data": data,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        try:
            response = requests.post(
                self.webhook_url,
                json=body,
                headers={"X-Webhook-Event": event},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.warning("Webhook %s failed: %s", event, e)
            return False
        return True

    def notify_import_start(self, data: Dict[str, Any]) -> bool:
        return self.send(EVENT_STARTED, data)

    def notify_import_progress(self, data: Dict[str, Any]) -> bool:
        return self.send(EVENT_PROGRESS, data)

    def notify_import_complete(self, data: Dict[str, Any]) -> bool:
        return self.send(EVENT_COMPLETED, data)

    def notify_import_error(self, data: Dict[str, Any]) -> bool:
        return self.send(EVENT_ERROR, data)

"""
Import lifecycle notifications.

Modules:
    webhook - Optional webhook delivery of import events
"""

from .webhook import WebhookNotifier

__all__ = ['WebhookNotifier']

"""
Exception types shared across the sync pipeline.

Clients raise these; the reconciler and image relocator decide which ones
are recovered per product/image and which abort the run.
"""

from typing import Any, Optional


class SyncError(Exception):
    """Base class for all sync errors."""


class ConfigurationError(SyncError):
    """Required settings are missing or invalid."""


class FeedFetchError(SyncError):
    """A Senetic feed endpoint could not be read."""

    def __init__(self, feed: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{feed} feed fetch failed: {message}")
        self.feed = feed
        self.status_code = status_code


class ShopifyAPIError(SyncError):
    """
    Shopify Admin API returned an error or could not be reached.

    Attributes:
        status_code: HTTP status (None for network errors)
        payload: Decoded JSON error body, or raw text when not JSON
    """

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class ShopifyNotFoundError(ShopifyAPIError):
    """Shopify returned 404 for the requested resource."""


class ImageRelocationError(SyncError):
    """A single image could not be downloaded, staged or attached."""


class ImportRunError(SyncError):
    """The import run failed as a whole. Carries the partial summary."""

    def __init__(self, message: str, summary=None):
        super().__init__(message)
        self.summary = summary


def describe_error(error: Exception) -> Any:
    """Return the remote error payload when there is one, else the message."""
    payload = getattr(error, "payload", None)
    if payload:
        return payload
    return str(error)

"""
Image host classification.

Decides, per hostname, whether Shopify can fetch an image directly, whether
it has to be relayed through Cloudinary, or whether it is dropped.
"""

from enum import Enum
from typing import Iterable, Optional
from urllib.parse import urlparse

from ..common.config_loader import load_image_domains


class DomainPolicy(Enum):
    DIRECT = "direct"
    RELAY = "relay"
    BLOCKED = "blocked"


def _normalize_host(hostname: Optional[str]) -> str:
    if not hostname:
        return ""
    host = hostname.strip().lower().rstrip(".")
    # Drop an explicit port
    host = host.split(":", 1)[0]
    if host.startswith("www."):
        host = host[4:]
    return host


class DomainClassifier:
    """
    Static allow-list classifier.

    Usage:
        classifier = DomainClassifier(direct=["cdn.shopify.com"], relay=["static.senetic.com"])
        classifier.classify("static.senetic.com")   # DomainPolicy.RELAY
        classifier.classify_url("https://evil.example/x.jpg")   # DomainPolicy.BLOCKED
    """

    def __init__(self, direct: Iterable[str], relay: Iterable[str]):
        self.direct_hosts = {_normalize_host(h) for h in direct if _normalize_host(h)}
        self.relay_hosts = {_normalize_host(h) for h in relay if _normalize_host(h)}

    @classmethod
    def from_config(cls) -> "DomainClassifier":
        """Build a classifier from config/image_domains.yaml."""
        domains = load_image_domains()
        return cls(direct=domains["direct"], relay=domains["relay"])

    def classify(self, hostname: Optional[str]) -> DomainPolicy:
        host = _normalize_host(hostname)
        if not host:
            return DomainPolicy.BLOCKED
        # Relay wins if a host is listed twice
        if host in self.relay_hosts:
            return DomainPolicy.RELAY
        if host in self.direct_hosts:
            return DomainPolicy.DIRECT
        return DomainPolicy.BLOCKED

    def classify_url(self, url: str) -> DomainPolicy:
        try:
            return self.classify(urlparse(url).hostname)
        except ValueError:
            return DomainPolicy.BLOCKED

    def is_allowed(self, hostname: Optional[str]) -> bool:
        return self.classify(hostname) is not DomainPolicy.BLOCKED

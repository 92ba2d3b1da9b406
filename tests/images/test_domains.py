"""Tests for src/images/domains.py"""

from src.images.domains import DomainClassifier, DomainPolicy


class TestClassify:
    def test_direct(self, classifier):
        assert classifier.classify("cdn.shopify.com") is DomainPolicy.DIRECT

    def test_relay(self, classifier):
        assert classifier.classify("static.senetic.com") is DomainPolicy.RELAY

    def test_unknown_is_blocked(self, classifier):
        assert classifier.classify("evil.example") is DomainPolicy.BLOCKED

    def test_empty_is_blocked(self, classifier):
        assert classifier.classify(None) is DomainPolicy.BLOCKED
        assert classifier.classify("") is DomainPolicy.BLOCKED

    def test_www_and_case_ignored(self, classifier):
        assert classifier.classify("WWW.Senetic.IT") is DomainPolicy.DIRECT

    def test_port_ignored(self, classifier):
        assert classifier.classify("static.senetic.com:443") is DomainPolicy.RELAY

    def test_subdomain_not_implied(self, classifier):
        assert classifier.classify("files.cdn.shopify.com") is DomainPolicy.BLOCKED

    def test_relay_wins_over_direct(self):
        classifier = DomainClassifier(direct=["static.senetic.com"], relay=["static.senetic.com"])
        assert classifier.classify("static.senetic.com") is DomainPolicy.RELAY


class TestClassifyUrl:
    def test_url(self, classifier):
        assert classifier.classify_url("https://static.senetic.com/a.jpg") is DomainPolicy.RELAY

    def test_malformed_url(self, classifier):
        assert classifier.classify_url("http://[::1") is DomainPolicy.BLOCKED

    def test_is_allowed(self, classifier):
        assert classifier.is_allowed("cdn.shopify.com")
        assert not classifier.is_allowed("evil.example")


class TestFromConfig:
    def test_loads_yaml_hosts(self):
        classifier = DomainClassifier.from_config()
        assert classifier.classify("cdn.shopify.com") is DomainPolicy.DIRECT
        assert classifier.classify("static.senetic.com") is DomainPolicy.RELAY

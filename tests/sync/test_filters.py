"""Tests for src/sync/filters.py"""

from src.models import SupplierCatalogueRecord
from src.sync.filters import FilterCriteria, filter_catalogue


def _record(code, category, brand="Hikvision"):
    return SupplierCatalogueRecord(code, category_name=category, brand_name=brand)


class TestFilterCriteria:
    def test_category_match(self):
        criteria = FilterCriteria(categories=["Sistemi di sorveglianza"])
        assert criteria.matches(_record("A", "Sistemi di sorveglianza"))
        assert not criteria.matches(_record("B", "Stampanti"))

    def test_category_comparison_ignores_case_and_spaces(self):
        criteria = FilterCriteria(categories=["Reti"])
        assert criteria.matches(_record("A", "  RETI "))

    def test_missing_category_never_matches(self):
        assert not FilterCriteria(categories=["Reti"]).matches(_record("A", ""))

    def test_all_brands_by_default(self):
        criteria = FilterCriteria(categories=["Reti"])
        assert criteria.matches(_record("A", "Reti", brand="Anything"))
        assert criteria.matches(_record("B", "Reti", brand=""))

    def test_brand_filter(self):
        criteria = FilterCriteria(categories=["Reti"], brands=["Ubiquiti"])
        assert criteria.matches(_record("A", "Reti", brand="ubiquiti"))
        assert not criteria.matches(_record("B", "Reti", brand="Cisco"))
        assert not criteria.matches(_record("C", "Reti", brand=""))

    def test_from_config(self):
        criteria = FilterCriteria.from_config()
        assert "Reti" in criteria.categories
        assert criteria.brands is None


class TestFilterCatalogue:
    def test_preserves_order(self):
        records = [_record("A", "Reti"), _record("B", "Stampanti"), _record("C", "Reti")]
        selected = filter_catalogue(records, FilterCriteria(categories=["Reti"]))
        assert [r.manufacturer_item_code for r in selected] == ["A", "C"]

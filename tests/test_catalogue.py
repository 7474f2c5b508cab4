"""
Tests for the static services catalogue.
"""

from __future__ import annotations

from app.application.use_cases.catalogue import GetCatalogueUseCase
from app.infrastructure.knowledge.service_catalog_store import ServiceCatalogueStore


def test_catalogue_has_four_categories_with_expected_counts():
    result = GetCatalogueUseCase(ServiceCatalogueStore()).execute()

    assert result.status == "completed"
    assert [(c.category, len(c.services)) for c in result.catalogue] == [
        ("Haircuts", 3),
        ("Color Services", 4),
        ("Treatments", 2),
        ("Styling", 3),
    ]


def test_catalogue_serializes_free_text_fields():
    result = GetCatalogueUseCase(ServiceCatalogueStore()).execute()
    haircuts = result.to_dict()["catalogue"][0]

    assert haircuts["services"][1] == {
        "service": "Women's Haircut",
        "price": "$50-$70",
        "duration": "60 min",
        "description": "Consultation, wash, cut, and style",
    }


def test_find_service_is_case_and_typo_tolerant():
    store = ServiceCatalogueStore()

    category, service = store.find_service("  balayage ")
    assert category == "Color Services"
    assert service.price == "$150+"

    assert store.find_service("womens haircut")[1].service == "Women's Haircut"
    assert store.find_service("Keratin Treatmnt")[1].service == "Keratin Treatment"
    assert store.find_service("tattoo") is None
    assert store.find_service("") is None


def test_failing_catalogue_returns_error_status():
    class BrokenCatalogue(ServiceCatalogueStore):
        def list_categories(self):
            raise OSError("disk gone")

    result = GetCatalogueUseCase(BrokenCatalogue()).execute()

    assert result.status == "error"
    assert result.catalogue == ()
    assert result.message == "Failed to fetch services catalogue"

from __future__ import annotations

import re
from difflib import get_close_matches

from app.application.ports.service_catalog import ServiceCataloguePort
from app.domain.entities.service_catalog import Service, ServiceCategory
from app.infrastructure.knowledge.service_catalog_data import SERVICE_CATALOGUE


class ServiceCatalogueStore(ServiceCataloguePort):
    def __init__(self, catalogue: tuple[ServiceCategory, ...] | None = None) -> None:
        self._catalogue = SERVICE_CATALOGUE if catalogue is None else tuple(catalogue)
        self._index: dict[str, tuple[str, Service]] = {
            _normalize(s.service): (c.category, s)
            for c in self._catalogue
            for s in c.services
        }

    def list_categories(self) -> tuple[ServiceCategory, ...]:
        return self._catalogue

    def find_service(self, name: str) -> tuple[str, Service] | None:
        key = _normalize(name)
        if not key:
            return None
        if key in self._index:
            return self._index[key]
        # Tolerate small typos from free text ("womens haircut", "balayge").
        matches = get_close_matches(key, list(self._index), n=1, cutoff=0.85)
        return self._index[matches[0]] if matches else None


def _normalize(text: str) -> str:
    text = text.lower().strip().replace("'", "")
    return re.sub(r"\s+", " ", text)

from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.service_catalog import Service, ServiceCategory


class ServiceCataloguePort(ABC):
    @abstractmethod
    def list_categories(self) -> tuple[ServiceCategory, ...]:
        """Return every category in display order."""
        raise NotImplementedError

    @abstractmethod
    def find_service(self, name: str) -> tuple[str, Service] | None:
        """Look up a service by name. Returns (category, service) or None."""
        raise NotImplementedError

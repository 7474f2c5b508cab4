from __future__ import annotations

import logging

from app.application.ports.service_catalog import ServiceCataloguePort
from app.domain.entities.service_catalog import CatalogueResult


class GetCatalogueUseCase:
    def __init__(self, catalogue: ServiceCataloguePort) -> None:
        self._catalogue = catalogue
        self._logger = logging.getLogger(__name__)

    def execute(self) -> CatalogueResult:
        try:
            categories = self._catalogue.list_categories()
        except Exception as e:
            self._logger.exception("Failed to load services catalogue", extra={"error": str(e)})
            return CatalogueResult(
                catalogue=(),
                status="error",
                message="Failed to fetch services catalogue",
            )
        return CatalogueResult(catalogue=tuple(categories))

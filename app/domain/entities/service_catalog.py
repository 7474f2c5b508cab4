from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Service:
    service: str
    price: str  # free text, e.g. "$50-$70" or "$100+"
    duration: str  # free text, e.g. "2-3 hrs"
    description: str

    def to_dict(self) -> dict[str, str]:
        return {
            "service": self.service,
            "price": self.price,
            "duration": self.duration,
            "description": self.description,
        }


@dataclass(frozen=True)
class ServiceCategory:
    category: str
    services: tuple[Service, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, object]:
        return {
            "category": self.category,
            "services": [s.to_dict() for s in self.services],
        }


@dataclass(frozen=True)
class CatalogueResult:
    catalogue: tuple[ServiceCategory, ...]
    status: str = "completed"  # "completed" | "error"
    message: str | None = None

    def to_dict(self) -> dict[str, object]:
        out: dict[str, object] = {
            "catalogue": [c.to_dict() for c in self.catalogue],
            "status": self.status,
        }
        if self.message is not None:
            out["message"] = self.message
        return out

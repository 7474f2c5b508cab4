from __future__ import annotations

from app.domain.entities.service_catalog import Service, ServiceCategory

SERVICE_CATALOGUE: tuple[ServiceCategory, ...] = (
    ServiceCategory(
        category="Haircuts",
        services=(
            Service("Men's Haircut", "$30", "30 min", "Consultation, wash, cut, and style"),
            Service("Women's Haircut", "$50-$70", "60 min", "Consultation, wash, cut, and style"),
            Service("Children's Haircut", "$25", "30 min", "Ages 12 and under"),
        ),
    ),
    ServiceCategory(
        category="Color Services",
        services=(
            Service("Root Touch-up", "$75", "90 min", "Single color application at the roots"),
            Service("Full Color", "$100+", "2-3 hrs", "All-over color application"),
            Service("Highlights/Lowlights", "$120+", "2-3 hrs", "Partial or full foil options"),
            Service("Balayage", "$150+", "3+ hrs", "Hand-painted highlights for natural look"),
        ),
    ),
    ServiceCategory(
        category="Treatments",
        services=(
            Service("Deep Conditioning", "$25", "30 min", "Intensive treatment for damaged hair"),
            Service("Keratin Treatment", "$200+", "2-3 hrs", "Long-lasting smoothing treatment"),
        ),
    ),
    ServiceCategory(
        category="Styling",
        services=(
            Service("Blow Dry & Style", "$35", "30 min", "Professional blowout and styling"),
            Service("Special Occasion", "$65+", "60 min", "Formal styling for events"),
            Service("Bridal Hair", "$100+", "90 min", "Includes consultation and trial"),
        ),
    ),
)

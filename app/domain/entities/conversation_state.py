from dataclasses import dataclass

from app.domain.entities.booking_state import BookingAttempt
from app.domain.entities.service_catalog import Service
from app.domain.entities.slot import Slot


@dataclass(frozen=True)
class ConversationState:
    selected_service: Service | None = None
    selected_category: str | None = None
    selected_slot: Slot | None = None
    booking: BookingAttempt | None = None  # current attempt, held by the caller
    last_tool: str | None = None

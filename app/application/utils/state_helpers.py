from __future__ import annotations

from dataclasses import replace

from app.application.exceptions import InvalidBookingTransition
from app.domain.entities.booking import BookingRequest, BookingResult
from app.domain.entities.booking_state import (
    ALLOWED_TRANSITIONS,
    CONFIRMING,
    BookingAttempt,
)
from app.domain.entities.conversation_state import ConversationState
from app.domain.entities.service_catalog import Service
from app.domain.entities.slot import Slot


def advance_attempt(
    attempt: BookingAttempt,
    status: str,
    result: BookingResult | None = None,
) -> BookingAttempt:
    """Move a booking attempt along one edge of its state machine."""
    allowed = ALLOWED_TRANSITIONS.get(attempt.status, frozenset())
    if status not in allowed:
        raise InvalidBookingTransition(f"Cannot move booking from {attempt.status!r} to {status!r}")
    return replace(
        attempt,
        status=status,
        result=result if result is not None else attempt.result,
        attempts=attempt.attempts + 1 if status == CONFIRMING else attempt.attempts,
    )


def select_service(state: ConversationState, category: str | None, service: Service) -> ConversationState:
    """Picking a (new) service invalidates any slot or booking chosen for the old one."""
    return ConversationState(
        selected_service=service,
        selected_category=category,
        selected_slot=None,
        booking=None,
        last_tool=state.last_tool,
    )


def select_slot(state: ConversationState, slot: Slot) -> ConversationState:
    return replace(state, selected_slot=slot, booking=None)


def present_booking(state: ConversationState, request: BookingRequest) -> ConversationState:
    return replace(state, booking=BookingAttempt(request=request))


def record_booking(state: ConversationState, attempt: BookingAttempt) -> ConversationState:
    return replace(state, booking=attempt)


def reset_all_transient(state: ConversationState) -> ConversationState:
    """Reset all transient state (service, slot and booking) to initial state."""
    return ConversationState(last_tool=state.last_tool)

from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities.booking import BookingRequest, BookingResult

PRESENTED = "presented"
CONFIRMING = "confirming"
COMPLETED = "completed"
FAILED = "failed"
REJECTED = "rejected"

# FAILED is terminal for the attempt, but the caller may re-enter CONFIRMING by hand.
ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    PRESENTED: frozenset({CONFIRMING, REJECTED}),
    CONFIRMING: frozenset({COMPLETED, FAILED}),
    FAILED: frozenset({CONFIRMING}),
    COMPLETED: frozenset(),
    REJECTED: frozenset(),
}


@dataclass(frozen=True)
class BookingAttempt:
    request: BookingRequest
    status: str = PRESENTED
    result: BookingResult | None = None
    attempts: int = 0  # number of times CONFIRMING was entered

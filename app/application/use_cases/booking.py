from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

from app.application.exceptions import (
    TransportError,
    UpstreamHTTPError,
    UpstreamShapeError,
)
from app.application.ports.scheduling import SchedulingPort
from app.application.utils.slot_parser import format_start_for_display
from app.application.utils.state_helpers import advance_attempt
from app.core.config import CalComConfig
from app.domain.entities.booking import BookingRequest, BookingResponseField, BookingResult
from app.domain.entities.booking_state import (
    COMPLETED,
    CONFIRMING,
    FAILED,
    REJECTED,
    BookingAttempt,
)


class BookAppointmentUseCase:
    def __init__(
        self,
        scheduling: SchedulingPort,
        config: CalComConfig,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._scheduling = scheduling
        self._config = config
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def book(self, request: BookingRequest) -> BookingResult:
        """Submit the booking and normalize the outcome. Never raises for scheduling failures."""
        try:
            body = self._scheduling.create_booking(
                request,
                username=self._config.username,
                event_type_slug=self._config.event_type_slug,
            )
            booking = _unwrap_booking(body)
        except UpstreamHTTPError as e:
            return BookingResult(
                uid="",
                status="failed",
                message=f"Booking failed: {_error_text(e.body) or f'HTTP {e.status_code}'}",
                http_status=e.status_code,
                error=e.body,
            )
        except (TransportError, UpstreamShapeError) as e:
            self._logger.warning("Booking failed", extra={"error": str(e)})
            return BookingResult(uid="", status="failed", message=f"Booking failed: {e}")
        except Exception as e:
            self._logger.exception("Unexpected error during booking", extra={"error": str(e)})
            return BookingResult(
                uid="",
                status="failed",
                message="An unexpected error occurred during booking.",
            )

        uid = str(booking["uid"])
        self._logger.info("Booking completed", extra={"uid": uid, "service": request.metadata.service})
        return BookingResult(
            uid=uid,
            status="completed",
            responses=_parse_responses(booking.get("responses")),
            sms_reminder_number=booking.get("smsReminderNumber"),
            message=(
                f"Successfully booked {request.metadata.service} for "
                f"{format_start_for_display(request.start)}. Total: {request.metadata.price}"
            ),
        )

    def reject(self, request: BookingRequest) -> BookingResult:
        """User declined the booking. Purely local: nothing is sent to Cal.com."""
        return BookingResult(
            uid=f"rejected-{int(self._clock() * 1000)}",
            status="rejected",
            responses={},
            sms_reminder_number=None,
            message=(
                f"Booking for {request.metadata.service} on "
                f"{format_start_for_display(request.start)} was cancelled."
            ),
        )

    def create_raw(self, request: BookingRequest) -> tuple[int, Any]:
        """
        Pass-through used by the HTTP boundary: returns (status_code, body)
        with the upstream body unmodified. Errors other than a non-2xx
        answer propagate to the caller.
        """
        try:
            body = self._scheduling.create_booking(
                request,
                username=self._config.username,
                event_type_slug=self._config.event_type_slug,
            )
        except UpstreamHTTPError as e:
            return e.status_code, e.body
        return 200, body

    def confirm(self, attempt: BookingAttempt) -> BookingAttempt:
        confirming = advance_attempt(attempt, CONFIRMING)
        result = self.book(confirming.request)
        next_status = COMPLETED if result.status == "completed" else FAILED
        return advance_attempt(confirming, next_status, result=result)

    def cancel(self, attempt: BookingAttempt) -> BookingAttempt:
        return advance_attempt(attempt, REJECTED, result=self.reject(attempt.request))


def _unwrap_booking(body: Any) -> dict[str, Any]:
    # v2 wraps the booking as {"status": "success", "data": {...}}.
    if isinstance(body, dict) and "uid" not in body and isinstance(body.get("data"), dict):
        body = body["data"]
    if not isinstance(body, dict) or not body.get("uid"):
        raise UpstreamShapeError("Invalid booking response from Cal.com API: missing uid")
    return body


def _parse_responses(raw: Any) -> dict[str, BookingResponseField]:
    if not isinstance(raw, dict):
        return {}
    out: dict[str, BookingResponseField] = {}
    for name, entry in raw.items():
        if isinstance(entry, dict) and "value" in entry:
            out[name] = BookingResponseField(label=str(entry.get("label") or name), value=entry["value"])
        else:
            out[name] = BookingResponseField(label=name, value=entry)
    return out


def _error_text(body: Any) -> str | None:
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict):
            return error.get("message") or error.get("code")
        if isinstance(error, str):
            return error
        if isinstance(body.get("message"), str):
            return body["message"]
    return None


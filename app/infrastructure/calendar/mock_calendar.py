from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from app.application.exceptions import UpstreamHTTPError
from app.application.ports.scheduling import SchedulingPort
from app.domain.entities.booking import BookingRequest


class MockScheduling(SchedulingPort):
    """In-memory stand-in for Cal.com used in dev/local when no API key is set."""

    def __init__(self, open_hour: int = 9, close_hour: int = 17, step_minutes: int = 60) -> None:
        self._open_hour = open_hour
        self._close_hour = close_hour
        self._step = timedelta(minutes=step_minutes)
        self._booked: dict[str, str] = {}  # slot start -> booking uid
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def fetch_slots(
        self,
        start: str,
        end: str,
        username: str,
        event_type_slug: str,
    ) -> dict[str, list[dict[str, Any]]]:
        window_start = _parse_iso(start)
        window_end = _parse_iso(end)

        slots_by_date: dict[str, list[dict[str, Any]]] = {}
        day = window_start.replace(hour=0, minute=0, second=0, microsecond=0)
        while day < window_end:
            current = day.replace(hour=self._open_hour)
            closing = day.replace(hour=self._close_hour)
            while current < closing:
                if window_start <= current < window_end:
                    stamp = _format_iso(current)
                    with self._lock:
                        taken = stamp in self._booked
                    if not taken:
                        slots_by_date.setdefault(current.date().isoformat(), []).append({"time": stamp})
                current += self._step
            day += timedelta(days=1)
        return slots_by_date

    def create_booking(
        self,
        request: BookingRequest,
        username: str,
        event_type_slug: str,
    ) -> dict[str, Any]:
        stamp = _format_iso(_parse_iso(request.start))
        uid = uuid.uuid4().hex
        with self._lock:
            if stamp in self._booked:
                raise UpstreamHTTPError(
                    409,
                    {"status": "error", "error": {"code": "Conflict", "message": "Slot already booked"}},
                )
            self._booked[stamp] = uid
        self._logger.info("Mock booking created", extra={"uid": uid, "start": stamp})

        responses: dict[str, Any] = {
            "name": {"label": "your_name", "value": request.name},
            "email": {"label": "email_address", "value": request.email},
        }
        if request.phone_number:
            responses["attendeePhoneNumber"] = {"label": "phone_number", "value": request.phone_number}

        return {
            "uid": uid,
            "start": stamp,
            "eventTypeSlug": event_type_slug,
            "username": username,
            "responses": responses,
            "smsReminderNumber": request.phone_number,
            "metadata": request.metadata.to_dict(),
        }


def _parse_iso(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _format_iso(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.000Z")

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.application.exceptions import TransportError, UpstreamHTTPError, UpstreamShapeError
from app.application.ports.scheduling import SchedulingPort
from app.core.config import CalComConfig
from app.domain.entities.booking import BookingRequest

SLOTS_API_VERSION = "2024-09-04"
BOOKINGS_API_VERSION = "2024-08-13"


class CalComClient(SchedulingPort):
    def __init__(
        self,
        config: CalComConfig,
        client: httpx.Client | None = None,
    ) -> None:
        self._config = config
        self._base_url = config.base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=config.timeout_seconds)
        self._logger = logging.getLogger(__name__)

    def fetch_slots(
        self,
        start: str,
        end: str,
        username: str,
        event_type_slug: str,
    ) -> dict[str, list[dict[str, Any]]]:
        url = f"{self._base_url}/v2/slots"
        params = {
            "start": start,
            "end": end,
            "username": username,
            "eventTypeSlug": event_type_slug,
        }
        headers = {
            "cal-api-version": SLOTS_API_VERSION,
            "content-type": "application/json",
        }

        try:
            response = self._client.get(url, params=params, headers=headers)
        except httpx.HTTPError as e:
            self._logger.error("Cal.com slots request failed", extra={"error": str(e)})
            raise TransportError(f"Could not reach Cal.com: {e}") from e

        if response.is_error:
            body = _error_body(response)
            self._logger.error(
                "Cal.com slots request rejected",
                extra={"status": response.status_code, "error": body},
            )
            raise UpstreamHTTPError(response.status_code, body)

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamShapeError("Invalid response from Cal.com API: body is not JSON") from e

        if not isinstance(data, dict) or data.get("status") != "success" or data.get("data") is None:
            raise UpstreamShapeError(
                "Invalid response from Cal.com API: missing data or unsuccessful status"
            )
        slots_by_date = data["data"]
        if not isinstance(slots_by_date, dict):
            raise UpstreamShapeError("Invalid response from Cal.com API: data is not a date mapping")

        return slots_by_date

    def create_booking(
        self,
        request: BookingRequest,
        username: str,
        event_type_slug: str,
    ) -> dict[str, Any]:
        url = f"{self._base_url}/v2/bookings"
        headers = {
            "Content-Type": "application/json",
            "cal-api-version": BOOKINGS_API_VERSION,
        }
        if self._config.api_key:
            headers["Authorization"] = f"Bearer {self._config.api_key}"

        attendee: dict[str, Any] = {
            "name": request.name,
            "email": request.email,
            "language": "en",
            "timeZone": "UTC",
        }
        if request.phone_number:
            attendee["phoneNumber"] = request.phone_number

        payload = {
            "attendee": attendee,
            "start": request.start,
            "eventTypeSlug": event_type_slug,
            "username": username,
            "metadata": request.metadata.to_dict(),
            "location": {
                "type": "attendeeAddress",
                "address": self._config.location_address,
            },
        }

        try:
            response = self._client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            self._logger.error("Cal.com booking request failed", extra={"error": str(e)})
            raise TransportError(f"Could not reach Cal.com: {e}") from e

        if response.is_error:
            body = _error_body(response)
            self._logger.error(
                "Cal.com booking rejected",
                extra={"status": response.status_code, "error": body},
            )
            raise UpstreamHTTPError(response.status_code, body)

        try:
            booking = response.json()
        except ValueError as e:
            raise UpstreamShapeError("Invalid booking response from Cal.com API: body is not JSON") from e

        self._logger.info("Cal.com booking created", extra={"start": request.start})
        return booking


def _error_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return {"error": response.text}

from __future__ import annotations

import logging

from app.application.exceptions import (
    TransportError,
    UpstreamHTTPError,
    UpstreamShapeError,
)
from app.application.ports.scheduling import SchedulingPort
from app.application.utils.slot_parser import flatten_slots
from app.core.config import CalComConfig
from app.domain.entities.slot import AvailabilityResult


class GetAvailabilityUseCase:
    """
    Availability gateway.

    Always returns an AvailabilityResult; scheduling failures come back as
    status="error" with no slots and a message the UI can show as-is.
    """

    def __init__(self, scheduling: SchedulingPort, config: CalComConfig) -> None:
        self._scheduling = scheduling
        self._config = config
        self._logger = logging.getLogger(__name__)

    def execute(
        self,
        start: str,
        end: str,
        username: str | None = None,
        event_type_slug: str | None = None,
    ) -> AvailabilityResult:
        # start >= end is forwarded untouched; Cal.com decides what that means.
        resolved_username = username or self._config.username
        resolved_slug = event_type_slug or self._config.event_type_slug

        try:
            slots_by_date = self._scheduling.fetch_slots(
                start=start,
                end=end,
                username=resolved_username,
                event_type_slug=resolved_slug,
            )
        except UpstreamHTTPError as e:
            return self._failed(f"Cal.com API request failed with status {e.status_code}", e)
        except UpstreamShapeError as e:
            return self._failed(str(e), e)
        except TransportError as e:
            return self._failed("Failed to fetch availability from Cal.com", e)
        except Exception as e:
            self._logger.exception("Unexpected error fetching availability")
            return self._failed("An unexpected error occurred while fetching availability.", e)

        slots = flatten_slots(slots_by_date)
        self._logger.info(
            "Availability fetched",
            extra={
                "username": resolved_username,
                "event_type_slug": resolved_slug,
                "slot_count": len(slots),
            },
        )
        return AvailabilityResult(available_slots=slots, time_zone="UTC", status="completed")

    def _failed(self, message: str, error: Exception) -> AvailabilityResult:
        self._logger.warning("Availability lookup failed", extra={"error": str(error)})
        return AvailabilityResult.error(message)

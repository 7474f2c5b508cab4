from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from app.domain.entities.booking import BookingRequest


class SchedulingPort(ABC):
    @abstractmethod
    def fetch_slots(
        self,
        start: str,
        end: str,
        username: str,
        event_type_slug: str,
    ) -> dict[str, list[dict[str, Any]]]:
        """
        Query open slots in [start, end).

        Returns the upstream per-date mapping (date string -> list of slot objects),
        in the order the upstream sent it.

        Raises:
            TransportError: the API could not be reached
            UpstreamHTTPError: non-2xx response
            UpstreamShapeError: 2xx response without a success status or date mapping
        """
        raise NotImplementedError

    @abstractmethod
    def create_booking(
        self,
        request: BookingRequest,
        username: str,
        event_type_slug: str,
    ) -> dict[str, Any]:
        """
        Create a booking. Returns the upstream response body unchanged.

        Raises:
            TransportError: the API could not be reached
            UpstreamHTTPError: non-2xx response, carrying status code and body
        """
        raise NotImplementedError

"""Shared test fixtures and fakes."""

from __future__ import annotations

from typing import Any

import pytest

from app.core.config import CalComConfig
from app.domain.entities.booking import BookingMetadata, BookingRequest


class FakeScheduling:
    """SchedulingPort double: returns canned data or raises, and records every call."""

    def __init__(
        self,
        slots_by_date: dict[str, list[dict[str, Any]]] | None = None,
        booking: Any = None,
        error: Exception | None = None,
    ) -> None:
        self.slots_by_date = slots_by_date if slots_by_date is not None else {}
        self.booking = booking
        self.error = error
        self.slot_calls: list[dict[str, str]] = []
        self.booking_calls: list[tuple[BookingRequest, str, str]] = []

    def fetch_slots(self, start: str, end: str, username: str, event_type_slug: str):
        self.slot_calls.append(
            {"start": start, "end": end, "username": username, "event_type_slug": event_type_slug}
        )
        if self.error is not None:
            raise self.error
        return self.slots_by_date

    def create_booking(self, request: BookingRequest, username: str, event_type_slug: str):
        self.booking_calls.append((request, username, event_type_slug))
        if self.error is not None:
            raise self.error
        return self.booking


@pytest.fixture
def cal_config() -> CalComConfig:
    return CalComConfig(
        username="test-salon",
        event_type_slug="salon-appointment",
        api_key="cal_test_key",
        base_url="https://cal.test",
    )


@pytest.fixture
def booking_request() -> BookingRequest:
    return BookingRequest(
        start="2025-05-01T09:00:00Z",
        name="Jane Doe",
        email="jane@example.com",
        phone_number="+15555550100",
        metadata=BookingMetadata(service="Balayage", price="$150+", duration="3+ hrs"),
    )


@pytest.fixture
def make_scheduling():
    return FakeScheduling

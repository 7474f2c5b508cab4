"""
Tests for the availability gateway.
"""

from __future__ import annotations

from datetime import datetime

from app.application.exceptions import TransportError, UpstreamHTTPError, UpstreamShapeError
from app.application.use_cases.availability import GetAvailabilityUseCase
from app.core.config import CalComConfig


def _parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def test_scenario_two_slots(make_scheduling, cal_config):
    scheduling = make_scheduling(
        slots_by_date={
            "2025-05-01": [{"time": "2025-05-01T09:00:00Z"}, {"time": "2025-05-01T10:00:00Z"}],
        }
    )
    uc = GetAvailabilityUseCase(scheduling, cal_config)

    result = uc.execute("2025-05-01T09:00:00Z", "2025-05-01T19:00:00Z")

    assert result.status == "completed"
    assert result.time_zone == "UTC"
    assert result.message is None
    assert result.to_dict()["availableSlots"] == [
        {"time": "2025-05-01T09:00:00Z", "bookingUid": None},
        {"time": "2025-05-01T10:00:00Z", "bookingUid": None},
    ]


def test_slots_lie_within_window(make_scheduling, cal_config):
    start, end = "2025-05-01T09:00:00Z", "2025-05-02T09:00:00Z"
    scheduling = make_scheduling(
        slots_by_date={
            "2025-05-01": [{"time": f"2025-05-01T{h:02d}:00:00Z"} for h in range(9, 19)],
            "2025-05-02": [{"start": "2025-05-02T08:00:00Z"}],
        }
    )
    result = GetAvailabilityUseCase(scheduling, cal_config).execute(start, end)

    assert len(result.available_slots) == 11
    for slot in result.available_slots:
        assert _parse(start) <= _parse(slot.time) < _parse(end)


def test_configured_defaults_used_when_arguments_absent(make_scheduling, cal_config):
    scheduling = make_scheduling()
    GetAvailabilityUseCase(scheduling, cal_config).execute("2025-05-01T09:00:00Z", "2025-05-01T19:00:00Z")

    assert scheduling.slot_calls[0]["username"] == "test-salon"
    assert scheduling.slot_calls[0]["event_type_slug"] == "salon-appointment"


def test_explicit_arguments_override_defaults(make_scheduling, cal_config):
    scheduling = make_scheduling()
    GetAvailabilityUseCase(scheduling, cal_config).execute(
        "2025-05-01T09:00:00Z", "2025-05-01T19:00:00Z", username="other", event_type_slug="color"
    )

    assert scheduling.slot_calls[0]["username"] == "other"
    assert scheduling.slot_calls[0]["event_type_slug"] == "color"


def test_inverted_range_is_forwarded_as_is(make_scheduling, cal_config):
    scheduling = make_scheduling()
    result = GetAvailabilityUseCase(scheduling, cal_config).execute("2025-05-02T00:00:00Z", "2025-05-01T00:00:00Z")

    assert scheduling.slot_calls[0]["start"] == "2025-05-02T00:00:00Z"
    assert result.status == "completed"
    assert result.available_slots == ()


def test_upstream_failures_become_error_results(make_scheduling, cal_config):
    errors = [
        TransportError("connection refused"),
        UpstreamHTTPError(503, {"error": "down"}),
        UpstreamShapeError("Invalid response from Cal.com API: missing data or unsuccessful status"),
        RuntimeError("boom"),
    ]
    for error in errors:
        result = GetAvailabilityUseCase(make_scheduling(error=error), cal_config).execute(
            "2025-05-01T09:00:00Z", "2025-05-01T19:00:00Z"
        )
        assert result.status == "error"
        assert result.available_slots == ()
        assert result.message
        assert result.to_dict()["availableSlots"] == []


def test_http_error_message_names_status(make_scheduling, cal_config):
    result = GetAvailabilityUseCase(
        make_scheduling(error=UpstreamHTTPError(404, {"error": "not found"})), cal_config
    ).execute("2025-05-01T09:00:00Z", "2025-05-01T19:00:00Z")

    assert "404" in result.message


def test_repeated_query_is_idempotent(make_scheduling):
    scheduling = make_scheduling(slots_by_date={"2025-05-01": [{"time": "2025-05-01T09:00:00Z"}]})
    uc = GetAvailabilityUseCase(scheduling, CalComConfig(username="u", event_type_slug="s"))

    first = uc.execute("2025-05-01T09:00:00Z", "2025-05-01T19:00:00Z")
    second = uc.execute("2025-05-01T09:00:00Z", "2025-05-01T19:00:00Z")

    assert first.available_slots == second.available_slots
    assert len(scheduling.slot_calls) == 2

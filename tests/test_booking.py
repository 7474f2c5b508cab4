"""
Tests for the booking gateway and the per-attempt state machine.
"""

from __future__ import annotations

import re

import pytest

from app.application.exceptions import (
    InvalidBookingTransition,
    TransportError,
    UpstreamHTTPError,
)
from app.application.use_cases.booking import BookAppointmentUseCase
from app.domain.entities.booking_state import BookingAttempt


UPSTREAM_BOOKING = {
    "uid": "bk_123",
    "responses": {
        "name": {"label": "your_name", "value": "Jane Doe"},
        "email": {"label": "email_address", "value": "jane@example.com"},
    },
    "smsReminderNumber": "+15555550100",
}


def test_successful_booking_is_normalized(make_scheduling, cal_config, booking_request):
    scheduling = make_scheduling(booking=UPSTREAM_BOOKING)
    result = BookAppointmentUseCase(scheduling, cal_config).book(booking_request)

    assert result.status == "completed"
    assert result.uid == "bk_123"
    assert result.sms_reminder_number == "+15555550100"
    assert result.responses["name"].value == "Jane Doe"
    assert result.message == "Successfully booked Balayage for Thu, May 1, 2025 at 9:00 AM UTC. Total: $150+"

    _, username, slug = scheduling.booking_calls[0]
    assert (username, slug) == ("test-salon", "salon-appointment")


def test_v2_data_envelope_is_unwrapped(make_scheduling, cal_config, booking_request):
    scheduling = make_scheduling(booking={"status": "success", "data": UPSTREAM_BOOKING})
    result = BookAppointmentUseCase(scheduling, cal_config).book(booking_request)

    assert result.status == "completed"
    assert result.uid == "bk_123"


def test_success_without_uid_is_a_failure(make_scheduling, cal_config, booking_request):
    result = BookAppointmentUseCase(make_scheduling(booking={"status": "success"}), cal_config).book(booking_request)

    assert result.status == "failed"
    assert result.uid == ""


def test_upstream_error_is_passed_through(make_scheduling, cal_config, booking_request):
    upstream = {"status": "error", "error": {"code": "Conflict", "message": "slot taken"}}
    scheduling = make_scheduling(error=UpstreamHTTPError(409, upstream))
    uc = BookAppointmentUseCase(scheduling, cal_config)

    result = uc.book(booking_request)
    assert result.status == "failed"
    assert result.http_status == 409
    assert result.error == upstream
    assert result.message == "Booking failed: slot taken"

    assert uc.create_raw(booking_request) == (409, upstream)


def test_create_raw_returns_upstream_body_on_success(make_scheduling, cal_config, booking_request):
    uc = BookAppointmentUseCase(make_scheduling(booking=UPSTREAM_BOOKING), cal_config)
    assert uc.create_raw(booking_request) == (200, UPSTREAM_BOOKING)


def test_create_raw_propagates_transport_errors(make_scheduling, cal_config, booking_request):
    uc = BookAppointmentUseCase(make_scheduling(error=TransportError("down")), cal_config)
    with pytest.raises(TransportError):
        uc.create_raw(booking_request)


def test_reject_never_calls_upstream(make_scheduling, cal_config, booking_request):
    scheduling = make_scheduling(booking=UPSTREAM_BOOKING)
    uc = BookAppointmentUseCase(scheduling, cal_config, clock=lambda: 1746090000.5)

    result = uc.reject(booking_request)

    assert scheduling.booking_calls == []
    assert result.status == "rejected"
    assert result.uid == "rejected-1746090000500"
    assert re.fullmatch(r"rejected-\d+", result.uid)
    assert result.responses == {}
    assert result.sms_reminder_number is None
    assert result.message == "Booking for Balayage on Thu, May 1, 2025 at 9:00 AM UTC was cancelled."


def test_attempt_confirm_completes(make_scheduling, cal_config, booking_request):
    uc = BookAppointmentUseCase(make_scheduling(booking=UPSTREAM_BOOKING), cal_config)

    attempt = uc.confirm(BookingAttempt(request=booking_request))

    assert attempt.status == "completed"
    assert attempt.result.uid == "bk_123"
    assert attempt.attempts == 1


def test_failed_attempt_can_be_confirmed_again(make_scheduling, cal_config, booking_request):
    scheduling = make_scheduling(error=UpstreamHTTPError(500, {"error": "oops"}))
    uc = BookAppointmentUseCase(scheduling, cal_config)

    failed = uc.confirm(BookingAttempt(request=booking_request))
    assert failed.status == "failed"

    scheduling.error = None
    scheduling.booking = UPSTREAM_BOOKING
    retried = uc.confirm(failed)

    assert retried.status == "completed"
    assert retried.attempts == 2
    assert len(scheduling.booking_calls) == 2


def test_terminal_attempts_cannot_move(make_scheduling, cal_config, booking_request):
    uc = BookAppointmentUseCase(make_scheduling(booking=UPSTREAM_BOOKING), cal_config)

    rejected = uc.cancel(BookingAttempt(request=booking_request))
    assert rejected.status == "rejected"
    with pytest.raises(InvalidBookingTransition):
        uc.confirm(rejected)

    completed = uc.confirm(BookingAttempt(request=booking_request))
    with pytest.raises(InvalidBookingTransition):
        uc.cancel(completed)

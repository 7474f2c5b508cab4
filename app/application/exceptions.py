from __future__ import annotations

from typing import Any


class SchedulingError(RuntimeError):
    """Base class for failures talking to the scheduling API."""


class TransportError(SchedulingError):
    """Raised when the scheduling API cannot be reached (DNS, connect, timeout)."""


class UpstreamHTTPError(SchedulingError):
    """Raised when the scheduling API answers with a non-2xx status."""

    def __init__(self, status_code: int, body: Any) -> None:
        super().__init__(f"Cal.com API request failed with status {status_code}: {body!r}")
        self.status_code = status_code
        self.body = body


class UpstreamShapeError(SchedulingError):
    """Raised when a 2xx payload is missing the fields we rely on."""


class InvalidBookingTransition(ValueError):
    """Raised when a booking attempt is moved along an edge the state machine does not have."""


class LLMUpstreamError(RuntimeError):
    """Raised when LLM provider fails (timeouts, network errors, service unavailable)."""
    pass


class LLMContractError(RuntimeError):
    """Raised when LLM adapter violates contract (bad format or missing data)."""
    pass

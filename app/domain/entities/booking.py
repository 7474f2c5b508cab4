from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class BookingMetadata:
    service: str
    price: str
    duration: str

    def to_dict(self) -> dict[str, str]:
        return {"service": self.service, "price": self.price, "duration": self.duration}


@dataclass(frozen=True)
class BookingRequest:
    start: str  # ISO 8601
    name: str
    email: str
    metadata: BookingMetadata
    phone_number: str | None = None


@dataclass(frozen=True)
class BookingResponseField:
    label: str
    value: Any


@dataclass(frozen=True)
class BookingResult:
    uid: str
    status: str  # "completed" | "rejected" | "failed"
    responses: dict[str, BookingResponseField] = field(default_factory=dict)
    sms_reminder_number: str | None = None
    message: str | None = None
    # Only set on "failed": upstream status code and error body, unmodified.
    http_status: int | None = None
    error: Any = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "uid": self.uid,
            "responses": {k: {"label": v.label, "value": v.value} for k, v in self.responses.items()},
            "smsReminderNumber": self.sms_reminder_number,
            "status": self.status,
        }
        if self.message is not None:
            out["message"] = self.message
        if self.status == "failed":
            out["httpStatus"] = self.http_status
            out["error"] = self.error
        return out

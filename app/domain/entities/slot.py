from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Slot:
    time: str  # ISO 8601, UTC
    booking_uid: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {"time": self.time, "bookingUid": self.booking_uid}


@dataclass(frozen=True)
class AvailabilityResult:
    available_slots: tuple[Slot, ...] = field(default_factory=tuple)
    time_zone: str = "UTC"
    status: str = "completed"  # "completed" | "error"
    message: str | None = None

    @classmethod
    def error(cls, message: str) -> "AvailabilityResult":
        return cls(available_slots=(), status="error", message=message)

    def to_dict(self) -> dict[str, object]:
        out: dict[str, object] = {
            "availableSlots": [s.to_dict() for s in self.available_slots],
            "timeZone": self.time_zone,
            "status": self.status,
        }
        if self.message is not None:
            out["message"] = self.message
        return out

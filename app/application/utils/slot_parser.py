from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from app.domain.entities.slot import Slot


def decode_slot_time(raw: Mapping[str, Any]) -> str:
    """
    Pick the start timestamp out of one upstream slot object.

    The slots endpoint has returned both {"time": ...} and {"start": ...}
    shapes. Precedence: a non-empty "time", then a non-empty "start",
    otherwise "".
    """
    for key in ("time", "start"):
        value = raw.get(key)
        if isinstance(value, str) and value:
            return value
    return ""


def flatten_slots(slots_by_date: Mapping[str, Any]) -> tuple[Slot, ...]:
    """Concatenate per-date slot lists in upstream order. No re-sorting."""
    out: list[Slot] = []
    for day_slots in slots_by_date.values():
        if not isinstance(day_slots, list):
            continue
        for raw in day_slots:
            if isinstance(raw, Mapping):
                out.append(Slot(time=decode_slot_time(raw), booking_uid=None))
    return tuple(out)


def parse_iso_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp; naive values are taken as UTC."""
    parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_start_for_display(value: str) -> str:
    """Human-readable start time, e.g. "Thu, May 1, 2025 at 9:00 AM UTC"."""
    try:
        dt = parse_iso_timestamp(value).astimezone(timezone.utc)
    except ValueError:
        return value
    hour = dt.hour % 12 or 12
    meridiem = "AM" if dt.hour < 12 else "PM"
    return f"{dt:%a}, {dt:%b} {dt.day}, {dt.year} at {hour}:{dt.minute:02d} {meridiem} UTC"

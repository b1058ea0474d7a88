# backend/kaizen_booking/services/availability/catalog.py
"""
Fixed daily slot grid.

Every practitioner shares the same eight one-hour slots, identified by
their 24h "HH:00" start label:

    morning:   08:00 09:00 10:00 11:00
    afternoon: 14:00 15:00 16:00 17:00
"""

MORNING_SLOTS: tuple[str, ...] = ("08:00", "09:00", "10:00", "11:00")
AFTERNOON_SLOTS: tuple[str, ...] = ("14:00", "15:00", "16:00", "17:00")
DEFAULT_TIME_SLOTS: tuple[str, ...] = MORNING_SLOTS + AFTERNOON_SLOTS

SLOT_LENGTH_MINUTES = 60


def morning_slots() -> tuple[str, ...]:
    return MORNING_SLOTS


def afternoon_slots() -> tuple[str, ...]:
    return AFTERNOON_SLOTS


def is_catalog_slot(label: str) -> bool:
    return label in DEFAULT_TIME_SLOTS


def _format_hour(hour: int) -> str:
    """Hour 0-24 -> "H:00 AM|PM"."""
    suffix = "AM" if hour % 24 < 12 else "PM"
    hour12 = hour % 12 or 12
    return f"{hour12}:00 {suffix}"


def display_label(slot: str) -> str:
    """
    Convert a 24h slot label to its 12h range.

    "08:00" -> "8:00 AM - 9:00 AM"
    "11:00" -> "11:00 AM - 12:00 PM"
    "14:00" -> "2:00 PM - 3:00 PM"

    Raises:
        ValueError: label is not "HH:MM" with a valid hour
    """
    try:
        hour_part, minute_part = slot.split(":")
        hour = int(hour_part)
        int(minute_part)
    except (AttributeError, ValueError):
        raise ValueError(f"Invalid slot label: {slot!r}")

    if not 0 <= hour <= 23:
        raise ValueError(f"Invalid slot label: {slot!r}")

    return f"{_format_hour(hour)} - {_format_hour(hour + SLOT_LENGTH_MINUTES // 60)}"

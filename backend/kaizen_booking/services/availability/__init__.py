# backend/kaizen_booking/services/availability/__init__.py
"""
Practitioner availability.

Catalog:  fixed 8-slot daily grid and its display labels
Resolver: free/busy slots per day from confirmed bookings + manual blocks
Writer:   upsert of manual blocks per (practitioner, date)
"""

from .catalog import (
    AFTERNOON_SLOTS,
    DEFAULT_TIME_SLOTS,
    MORNING_SLOTS,
    afternoon_slots,
    display_label,
    is_catalog_slot,
    morning_slots,
)
from .errors import (
    AvailabilityError,
    BookingNotFound,
    CalendarSyncError,
    DependencyFailure,
    InvalidArgument,
)
from .resolver import compute_day_availability, load_slot_list, resolve_day, resolve_range
from .writer import list_availability_blocks, save_availability_block

__all__ = [
    "AFTERNOON_SLOTS",
    "DEFAULT_TIME_SLOTS",
    "MORNING_SLOTS",
    "afternoon_slots",
    "display_label",
    "is_catalog_slot",
    "morning_slots",
    "AvailabilityError",
    "BookingNotFound",
    "CalendarSyncError",
    "DependencyFailure",
    "InvalidArgument",
    "compute_day_availability",
    "load_slot_list",
    "resolve_day",
    "resolve_range",
    "list_availability_blocks",
    "save_availability_block",
]

# backend/kaizen_booking/services/availability/errors.py
"""Errors raised by availability resolution and booking side-effects."""


class AvailabilityError(Exception):
    """Base class for availability errors."""


class InvalidArgument(AvailabilityError):
    """Missing or malformed caller input. Never retried."""


class DependencyFailure(AvailabilityError):
    """Data-store read/write failed."""


class BookingNotFound(AvailabilityError):
    """Referenced booking does not exist."""


class CalendarSyncError(AvailabilityError):
    """External calendar API call failed."""

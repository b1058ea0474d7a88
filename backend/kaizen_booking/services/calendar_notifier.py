"""
backend/kaizen_booking/services/calendar_notifier.py

Mirrors bookings into Google Calendar after they are created, changed or
cancelled. Runs after the booking itself is stored; never touches
availability.

Blocked-slot bookings (service_type == "blocked") are not mirrored.
"""

import logging

from google.auth.exceptions import GoogleAuthError
from googleapiclient.errors import HttpError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.generated import Bookings
from . import google_calendar
from .availability.errors import (
    BookingNotFound,
    CalendarSyncError,
    DependencyFailure,
    InvalidArgument,
)

logger = logging.getLogger(__name__)

BLOCKED_SERVICE_TYPE = "blocked"


def create_calendar_event_for_booking(db: Session, booking_id) -> dict:
    """Create the calendar event and remember its id on the booking."""
    booking = _get_booking(db, booking_id)

    if booking.service_type == BLOCKED_SERVICE_TYPE:
        return {
            "message": "Calendar event not created for blocked slots",
            "booking_id": booking.id,
        }

    payload = _booking_payload(booking)

    try:
        result = google_calendar.create_event(payload)
    except (HttpError, GoogleAuthError) as e:
        raise CalendarSyncError(f"Failed to create calendar event: {e}") from e

    booking.calendar_event_id = result["event_id"]
    try:
        db.commit()
    except SQLAlchemyError as e:
        # Event exists in the calendar; only the back-reference is lost
        db.rollback()
        logger.error(f"Error saving calendar event id for booking {booking.id}: {e}")

    return {
        "message": "Calendar event created successfully",
        "eventId": result["event_id"],
        "booking_id": booking.id,
    }


def update_calendar_event_for_booking(db: Session, booking_id) -> dict:
    booking = _get_booking(db, booking_id)

    if not booking.calendar_event_id:
        raise InvalidArgument("No calendar event associated with this booking")

    if booking.service_type == BLOCKED_SERVICE_TYPE:
        return {
            "message": "Calendar event not updated for blocked slots",
            "booking_id": booking.id,
        }

    payload = _booking_payload(booking)

    try:
        google_calendar.update_event(booking.calendar_event_id, payload)
    except (HttpError, GoogleAuthError) as e:
        raise CalendarSyncError(f"Failed to update calendar event: {e}") from e

    return {
        "message": "Calendar event updated successfully",
        "booking_id": booking.id,
    }


def delete_calendar_event_for_booking(db: Session, booking_id) -> dict:
    """
    Delete the calendar event and clear the stored id.

    A calendar API failure is logged; the booking is detached from the
    event either way.
    """
    booking = _get_booking(db, booking_id)

    if not booking.calendar_event_id:
        return {
            "message": "No calendar event to delete",
            "booking_id": booking.id,
        }

    try:
        google_calendar.delete_event(booking.calendar_event_id)
    except (HttpError, GoogleAuthError) as e:
        logger.error(f"Failed to delete calendar event {booking.calendar_event_id}: {e}")

    booking.calendar_event_id = None
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error clearing calendar event id for booking {booking.id}: {e}")

    return {
        "message": "Calendar event deleted successfully",
        "booking_id": booking.id,
    }


# ── Helpers ──────────────────────────────────────────────────────────────


def _get_booking(db: Session, booking_id) -> Bookings:
    if booking_id is None or booking_id == "":
        raise InvalidArgument("Booking ID is required")

    try:
        booking = db.get(Bookings, int(booking_id))
    except (TypeError, ValueError):
        raise InvalidArgument(f"Invalid booking ID: {booking_id!r}")
    except SQLAlchemyError as e:
        logger.error(f"Error fetching booking {booking_id}: {e}")
        raise DependencyFailure("Failed to fetch booking") from e

    if booking is None:
        raise BookingNotFound("Booking not found")
    return booking


def _booking_payload(booking: Bookings) -> dict:
    """Date/time/attendees for the calendar event."""
    if booking.patient is None or booking.practitioner is None:
        raise InvalidArgument("Patient or practitioner information missing")

    return {
        "date": booking.date,
        "time": booking.time,
        "service_type": booking.service_type,
        "reason": booking.reason,
        "practitioner": {
            "email": booking.practitioner.email,
            "full_name": booking.practitioner.full_name,
        },
        "patient": {
            "email": booking.patient.email,
            "full_name": booking.patient.full_name,
        },
    }

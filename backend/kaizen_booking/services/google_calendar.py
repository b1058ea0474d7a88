"""
backend/kaizen_booking/services/google_calendar.py

Google Calendar client for booking events.

Handles:
- Calendar service construction from configured OAuth tokens
- Event body for a one-hour appointment with attendees
- Calendar event CRUD operations
"""

import logging
from datetime import datetime, timedelta

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..config import settings
from .availability.catalog import SLOT_LENGTH_MINUTES

logger = logging.getLogger(__name__)

TOKEN_URI = "https://oauth2.googleapis.com/token"


def _get_calendar_service():
    """Build Google Calendar API service client."""
    credentials = Credentials(
        token=settings.google_access_token or None,
        refresh_token=settings.google_refresh_token or None,
        token_uri=TOKEN_URI,
        client_id=settings.google_client_id,
        client_secret=settings.google_client_secret,
    )
    return build("calendar", "v3", credentials=credentials, cache_discovery=False)


def build_event_body(booking: dict, action: str = "created") -> dict:
    """
    Build a Calendar event resource for a booking.

    Args:
        booking: Booking data dictionary with keys:
            - date: "YYYY-MM-DD"
            - time: "HH:MM"
            - service_type: str (optional)
            - reason: str (optional)
            - practitioner: {"email", "full_name"}
            - patient: {"email", "full_name"}
        action: "created" / "updated" (used in description)
    """
    practitioner = booking["practitioner"]
    patient = booking["patient"]
    service_type = booking.get("service_type") or "Consultation"

    date_start = datetime.fromisoformat(f"{booking['date']}T{booking['time']}")
    date_end = date_start + timedelta(minutes=SLOT_LENGTH_MINUTES)

    description_parts = [
        "Medical Appointment Details:",
        f"- Practitioner: {practitioner.get('full_name')}",
        f"- Patient: {patient.get('full_name')}",
        f"- Service: {service_type}",
        f"- Date: {booking['date']}",
        f"- Time: {booking['time']}",
    ]
    if booking.get("reason"):
        description_parts.append(f"- Reason: {booking['reason']}")
    description_parts.append("")
    description_parts.append(f"This appointment was {action} through the Kaizen medical platform.")

    return {
        "summary": f"Medical Appointment - {service_type}",
        "description": "\n".join(description_parts),
        "start": {
            "dateTime": date_start.isoformat(),
            "timeZone": settings.calendar_timezone,
        },
        "end": {
            "dateTime": date_end.isoformat(),
            "timeZone": settings.calendar_timezone,
        },
        "attendees": [
            {"email": practitioner.get("email"), "displayName": practitioner.get("full_name")},
            {"email": patient.get("email"), "displayName": patient.get("full_name")},
        ],
        "reminders": {
            "useDefault": False,
            "overrides": [
                {"method": "email", "minutes": 24 * 60},
                {"method": "popup", "minutes": 30},
            ],
        },
    }


def create_event(booking: dict, calendar_id: str | None = None) -> dict:
    """
    Create a calendar event for a booking.

    Returns:
        {"event_id": str, "html_link": str}

    Raises:
        HttpError: If API call fails
    """
    service = _get_calendar_service()
    event = build_event_body(booking, "created")

    try:
        created_event = service.events().insert(
            calendarId=calendar_id or settings.google_calendar_id,
            body=event,
            sendUpdates="all",
        ).execute()

        logger.info(f"Created Google Calendar event: {created_event.get('id')}")

        return {
            "event_id": created_event.get("id"),
            "html_link": created_event.get("htmlLink"),
        }
    except HttpError as e:
        logger.error(f"Failed to create calendar event: {e}")
        raise


def update_event(event_id: str, booking: dict, calendar_id: str | None = None) -> dict:
    """
    Update an existing calendar event.

    Raises:
        HttpError: If API call fails
    """
    service = _get_calendar_service()
    event = build_event_body(booking, "updated")

    try:
        updated_event = service.events().update(
            calendarId=calendar_id or settings.google_calendar_id,
            eventId=event_id,
            body=event,
            sendUpdates="all",
        ).execute()

        logger.info(f"Updated Google Calendar event: {event_id}")

        return {
            "event_id": updated_event.get("id"),
            "html_link": updated_event.get("htmlLink"),
        }
    except HttpError as e:
        logger.error(f"Failed to update calendar event: {e}")
        raise


def delete_event(event_id: str, calendar_id: str | None = None) -> bool:
    """
    Delete a calendar event. Attendees are notified of the cancellation.

    Returns:
        True if deletion was successful (or event already gone)

    Raises:
        HttpError: If API call fails
    """
    service = _get_calendar_service()

    try:
        service.events().delete(
            calendarId=calendar_id or settings.google_calendar_id,
            eventId=event_id,
            sendUpdates="all",
        ).execute()

        logger.info(f"Deleted Google Calendar event: {event_id}")
        return True
    except HttpError as e:
        if e.resp.status in (404, 410):
            # Event already deleted
            logger.warning(f"Calendar event not found: {event_id}")
            return True
        logger.error(f"Failed to delete calendar event: {e}")
        raise

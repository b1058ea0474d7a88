# backend/kaizen_booking/routers/calendar.py
# Booking -> Google Calendar side-effects. Called by the booking workflow
# after a booking is created, rescheduled or cancelled.

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.calendar import CalendarSyncRequest, CalendarSyncResponse
from ..services.availability import (
    BookingNotFound,
    CalendarSyncError,
    DependencyFailure,
    InvalidArgument,
)
from ..services.calendar_notifier import (
    create_calendar_event_for_booking,
    delete_calendar_event_for_booking,
    update_calendar_event_for_booking,
)

router = APIRouter(prefix="/calendar", tags=["calendar"])


def _run(action, db: Session, booking_id):
    try:
        return action(db, booking_id)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except BookingNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (CalendarSyncError, DependencyFailure) as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("", response_model=CalendarSyncResponse, response_model_exclude_none=True)
def create_calendar_event(data: CalendarSyncRequest, db: Session = Depends(get_db)):
    return _run(create_calendar_event_for_booking, db, data.booking_id)


@router.put("", response_model=CalendarSyncResponse, response_model_exclude_none=True)
def update_calendar_event(data: CalendarSyncRequest, db: Session = Depends(get_db)):
    return _run(update_calendar_event_for_booking, db, data.booking_id)


@router.delete("", response_model=CalendarSyncResponse, response_model_exclude_none=True)
def delete_calendar_event(
    booking_id: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return _run(delete_calendar_event_for_booking, db, booking_id)

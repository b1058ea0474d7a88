# backend/kaizen_booking/routers/availability.py
"""
Availability API endpoints.

GET  /availability         - free slots for a date (single shape) or a range
POST /availability         - upsert a practitioner's manual block for a date
GET  /availability/blocks  - raw manual block rows
GET  /practitioners/{id}/availability - all manual block rows of a practitioner
"""

from typing import Optional, Union

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, sessionmaker

from ..database import get_db, get_session_factory
from ..schemas.availability import (
    AvailabilityBlockList,
    AvailabilityBlockSaved,
    AvailabilityBlockWrite,
    DayAvailabilityResponse,
    PractitionerAvailabilityList,
    RangeAvailabilityResponse,
)
from ..services.availability import (
    DependencyFailure,
    InvalidArgument,
    list_availability_blocks,
    resolve_day,
    resolve_range,
    save_availability_block,
)
from ..services.events import emit_event

router = APIRouter(tags=["availability"])


@router.get(
    "/availability",
    response_model=Union[DayAvailabilityResponse, RangeAvailabilityResponse],
    response_model_exclude_none=True,
)
async def get_availability(
    practitioner_id: Optional[str] = None,
    date: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    apply_blocks: bool = False,
    session_factory: sessionmaker = Depends(get_session_factory),
):
    """Bookable slots from confirmed bookings and manual blocks."""
    try:
        if date:
            return await resolve_day(session_factory, practitioner_id, date)
        return await resolve_range(
            session_factory,
            practitioner_id,
            start_date=start_date,
            end_date=end_date,
            apply_manual_blocks=apply_blocks,
        )
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DependencyFailure as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/availability", response_model=AvailabilityBlockSaved)
def save_availability(
    data: AvailabilityBlockWrite,
    db: Session = Depends(get_db),
):
    """Save/update a practitioner's blocked slots for one date."""
    try:
        obj = save_availability_block(
            db,
            data.practitioner_id,
            data.date,
            data.unavailable_slots,
        )
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DependencyFailure as e:
        raise HTTPException(status_code=500, detail=str(e))

    emit_event("availability_updated", {
        "practitioner_id": obj.practitioner_id,
        "date": obj.date,
    })

    return {
        "message": "Availability saved successfully",
        "data": obj,
    }


@router.get("/availability/blocks", response_model=AvailabilityBlockList)
def get_availability_blocks(
    practitioner_id: Optional[str] = None,
    date: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    db: Session = Depends(get_db),
):
    try:
        rows = list_availability_blocks(db, practitioner_id, date, start_date, end_date)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DependencyFailure as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"availability": rows}


@router.get(
    "/practitioners/{practitioner_id}/availability",
    response_model=PractitionerAvailabilityList,
)
def get_practitioner_availability(practitioner_id: str, db: Session = Depends(get_db)):
    try:
        rows = list_availability_blocks(db, practitioner_id)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DependencyFailure as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"availabilities": rows}

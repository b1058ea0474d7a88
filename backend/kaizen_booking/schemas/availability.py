"""
Pydantic schemas for availability API.

Resolver responses keep the camelCase keys the booking wizard reads
(bookedSlots, totalAvailable, ...).
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..services.availability import load_slot_list


class DaySlots(BaseModel):
    """Available display labels for one day."""
    morning: list[str]
    afternoon: list[str]


class DayAvailabilityResponse(BaseModel):
    """Single-date query."""
    date: str
    availability: DaySlots
    booked_slots: list[str] = Field(alias="bookedSlots")
    manually_blocked_slots: list[str] = Field(alias="manuallyBlockedSlots")

    model_config = ConfigDict(populate_by_name=True)


class RangeDayAvailability(BaseModel):
    """One day inside a range query."""
    availability: DaySlots
    booked_slots: list[str] = Field(alias="bookedSlots")
    total_available: int = Field(alias="totalAvailable")
    total_slots: int = Field(alias="totalSlots")
    # Only present when manual blocks were applied
    manually_blocked_slots: Optional[list[str]] = Field(
        default=None, alias="manuallyBlockedSlots"
    )

    model_config = ConfigDict(populate_by_name=True)


class RangeAvailabilityResponse(BaseModel):
    """Date-range query: ISO date -> day availability."""
    availability: dict[str, RangeDayAvailability]
    default_time_slots: list[str] = Field(alias="defaultTimeSlots")

    model_config = ConfigDict(populate_by_name=True)


class AvailabilityBlockWrite(BaseModel):
    practitioner_id: Optional[str] = None
    date: Optional[str] = None
    unavailable_slots: Optional[list[str]] = None


class AvailabilityBlockRead(BaseModel):
    id: int
    practitioner_id: str
    date: str
    unavailable_slots: list[str]
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("unavailable_slots", mode="before")
    @classmethod
    def decode_slots(cls, value):
        return load_slot_list(value)


class AvailabilityBlockSaved(BaseModel):
    message: str
    data: AvailabilityBlockRead


class AvailabilityBlockList(BaseModel):
    availability: list[AvailabilityBlockRead]


class PractitionerAvailabilityList(BaseModel):
    availabilities: list[AvailabilityBlockRead]

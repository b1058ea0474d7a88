from typing import Optional, Union
from pydantic import BaseModel


class CalendarSyncRequest(BaseModel):
    booking_id: Optional[Union[int, str]] = None


class CalendarSyncResponse(BaseModel):
    message: str
    booking_id: int
    eventId: Optional[str] = None

# backend/kaizen_booking/services/availability/query.py
"""
Input validation and date-window filters shared by resolver and writer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from .errors import InvalidArgument


def require_practitioner_id(practitioner_id) -> str:
    """Return the stripped id or raise InvalidArgument."""
    if practitioner_id is None:
        raise InvalidArgument("Practitioner ID is required")
    value = str(practitioner_id).strip()
    if not value:
        raise InvalidArgument("Practitioner ID is required")
    return value


def parse_date(value, field: str = "date") -> date | None:
    """Parse an ISO "YYYY-MM-DD" value. None/"" stays None."""
    if value is None or value == "":
        return None
    # datetime is a date subclass; keep only the calendar day
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidArgument(f"Invalid {field}: expected YYYY-MM-DD")
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise InvalidArgument(f"Invalid {field} format: {value!r}")


@dataclass(frozen=True)
class DateWindow:
    """
    Date filter with fixed precedence:

    1. exact date        -> column == date
    2. start and end     -> start <= column <= end
    3. start only        -> column >= start
    4. end only          -> column <= end
    5. nothing           -> no filter
    """
    date: date | None = None
    start_date: date | None = None
    end_date: date | None = None

    @classmethod
    def parse(cls, date=None, start_date=None, end_date=None) -> "DateWindow":
        return cls(
            date=parse_date(date, "date"),
            start_date=parse_date(start_date, "start_date"),
            end_date=parse_date(end_date, "end_date"),
        )

    def filters(self, column) -> list:
        """SQLAlchemy clauses for a text column holding ISO dates."""
        if self.date:
            return [column == self.date.isoformat()]
        if self.start_date and self.end_date:
            return [
                column >= self.start_date.isoformat(),
                column <= self.end_date.isoformat(),
            ]
        if self.start_date:
            return [column >= self.start_date.isoformat()]
        if self.end_date:
            return [column <= self.end_date.isoformat()]
        return []

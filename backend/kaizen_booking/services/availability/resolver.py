# backend/kaizen_booking/services/availability/resolver.py
"""
Availability resolution.

Occupied slots for a practitioner on a day are:
- times of confirmed bookings
- labels in the practitioner's manual block row for that day

A catalog slot is available iff it is in neither set.

Two reads (bookings, manual blocks) run concurrently in worker threads,
each with its own session, and are joined before anything is computed.
"""

import asyncio
import json
import logging
from datetime import date, datetime, timedelta, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ...config import settings
from ...models.generated import Availabilities, Bookings
from .catalog import AFTERNOON_SLOTS, DEFAULT_TIME_SLOTS, MORNING_SLOTS, display_label
from .errors import DependencyFailure, InvalidArgument
from .query import DateWindow, parse_date, require_practitioner_id

logger = logging.getLogger(__name__)

CONFIRMED = "confirmed"


async def resolve_day(
    session_factory: sessionmaker,
    practitioner_id: str,
    target_date,
) -> dict:
    """
    Availability for a single date.

    Returns:
        {
            "date": "YYYY-MM-DD",
            "availability": {"morning": [...], "afternoon": [...]},
            "bookedSlots": [...],
            "manuallyBlockedSlots": [...],
        }

    Raises:
        InvalidArgument: missing practitioner_id or date
        DependencyFailure: bookings could not be fetched
    """
    practitioner_id = require_practitioner_id(practitioner_id)
    day = parse_date(target_date, "date")
    if day is None:
        raise InvalidArgument("Date is required")

    window = DateWindow(date=day)
    bookings, blocks = await _fetch_window(
        session_factory, practitioner_id, window, tolerate_block_failure=True
    )

    booked = _unique([time for _, time in bookings])
    blocked = blocks.get(day.isoformat(), [])

    return {
        "date": day.isoformat(),
        "availability": compute_day_availability(booked, blocked),
        "bookedSlots": booked,
        "manuallyBlockedSlots": blocked,
    }


async def resolve_range(
    session_factory: sessionmaker,
    practitioner_id: str,
    date=None,
    start_date=None,
    end_date=None,
    apply_manual_blocks: bool = False,
    today: date | None = None,
) -> dict:
    """
    Availability for every day of a date window.

    Manual blocks are fetched but only subtracted when apply_manual_blocks
    is set; by default each day reflects confirmed bookings only.

    Returns:
        {
            "availability": {
                "YYYY-MM-DD": {
                    "availability": {"morning": [...], "afternoon": [...]},
                    "bookedSlots": [...],
                    "totalAvailable": int,
                    "totalSlots": 8,
                },
                ...
            },
            "defaultTimeSlots": [...],
        }
    """
    practitioner_id = require_practitioner_id(practitioner_id)
    window = DateWindow.parse(date=date, start_date=start_date, end_date=end_date)
    days = _days_in_window(window, today or _today())

    bookings, blocks = await _fetch_window(
        session_factory, practitioner_id, window, tolerate_block_failure=False
    )

    bookings_by_date: dict[str, list[str]] = {}
    for day_key, time in bookings:
        bookings_by_date.setdefault(day_key, []).append(time)

    availability_by_date: dict[str, dict] = {}
    for day in days:
        day_key = day.isoformat()
        booked = bookings_by_date.get(day_key, [])
        blocked = blocks.get(day_key, []) if apply_manual_blocks else []

        slots = compute_day_availability(booked, blocked)
        entry = {
            "availability": slots,
            "bookedSlots": booked,
            "totalAvailable": len(slots["morning"]) + len(slots["afternoon"]),
            "totalSlots": len(DEFAULT_TIME_SLOTS),
        }
        if apply_manual_blocks:
            entry["manuallyBlockedSlots"] = blocked
        availability_by_date[day_key] = entry

    return {
        "availability": availability_by_date,
        "defaultTimeSlots": list(DEFAULT_TIME_SLOTS),
    }


def compute_day_availability(booked, blocked=()) -> dict[str, list[str]]:
    """Catalog slots in neither set, as display labels, in catalog order."""
    occupied = set(booked) | set(blocked)
    return {
        "morning": [display_label(s) for s in MORNING_SLOTS if s not in occupied],
        "afternoon": [display_label(s) for s in AFTERNOON_SLOTS if s not in occupied],
    }


# ── Window ───────────────────────────────────────────────────────────────


def _today() -> date:
    """Current UTC date."""
    return datetime.now(timezone.utc).date()


def _days_in_window(window: DateWindow, today: date) -> list[date]:
    """
    Calendar days to report on, inclusive.

    start: start_date, else date, else today
    end:   end_date, else date, else start
    """
    first = window.start_date or window.date or today
    last = window.end_date or window.date or first

    if last < first:
        return []

    span = (last - first).days + 1
    if span > settings.availability_max_range_days:
        raise InvalidArgument(
            f"Date range cannot exceed {settings.availability_max_range_days} days"
        )

    return [first + timedelta(days=i) for i in range(span)]


# ── Fetch ────────────────────────────────────────────────────────────────


async def _fetch_window(
    session_factory: sessionmaker,
    practitioner_id: str,
    window: DateWindow,
    tolerate_block_failure: bool,
) -> tuple[list[tuple[str, str]], dict[str, list[str]]]:
    """Run both reads concurrently and join them."""
    bookings, blocks = await asyncio.gather(
        asyncio.to_thread(_fetch_confirmed_bookings, session_factory, practitioner_id, window),
        asyncio.to_thread(_fetch_manual_blocks, session_factory, practitioner_id, window),
        return_exceptions=True,
    )

    if isinstance(bookings, BaseException):
        raise bookings

    if isinstance(blocks, DependencyFailure) and tolerate_block_failure:
        logger.warning(
            f"Manual blocks unavailable for practitioner {practitioner_id}, "
            f"treating as none: {blocks}"
        )
        blocks = {}
    elif isinstance(blocks, BaseException):
        raise blocks

    return bookings, blocks


def _fetch_confirmed_bookings(
    session_factory: sessionmaker,
    practitioner_id: str,
    window: DateWindow,
) -> list[tuple[str, str]]:
    """(date, "HH:MM") pairs of confirmed bookings, ordered by date, time."""
    db = session_factory()
    try:
        rows = (
            db.query(Bookings.date, Bookings.time)
            .filter(
                Bookings.practitioner_id == practitioner_id,
                Bookings.status == CONFIRMED,
                *window.filters(Bookings.date),
            )
            .order_by(Bookings.date, Bookings.time)
            .all()
        )
    except SQLAlchemyError as e:
        logger.error(f"Error fetching bookings for availability: {e}")
        raise DependencyFailure("Failed to fetch availability") from e
    finally:
        db.close()

    return [(day, _normalize_time(time)) for day, time in rows]


def _fetch_manual_blocks(
    session_factory: sessionmaker,
    practitioner_id: str,
    window: DateWindow,
) -> dict[str, list[str]]:
    """date -> blocked labels."""
    db = session_factory()
    try:
        rows = (
            db.query(Availabilities.date, Availabilities.unavailable_slots)
            .filter(
                Availabilities.practitioner_id == practitioner_id,
                *window.filters(Availabilities.date),
            )
            .order_by(Availabilities.date)
            .all()
        )
    except SQLAlchemyError as e:
        logger.error(f"Error fetching manual blocks for availability: {e}")
        raise DependencyFailure("Failed to fetch availability blocks") from e
    finally:
        db.close()

    return {day: _unique(load_slot_list(raw)) for day, raw in rows}


# ── Helpers ──────────────────────────────────────────────────────────────


def load_slot_list(raw) -> list[str]:
    """Decode a stored unavailable_slots value (JSON text or list)."""
    if raw is None or raw == "":
        return []
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Unreadable unavailable_slots value: {raw!r}")
            return []
    if not isinstance(raw, list):
        return []
    return [str(s) for s in raw]


def _normalize_time(value) -> str:
    """Canonical "HH:MM": 09:00:00 -> 09:00, 9:00 -> 09:00."""
    text = str(value).strip()
    hour, sep, rest = text.partition(":")
    if not sep or not hour.isdigit() or len(rest) < 2:
        return text
    return f"{int(hour):02d}:{rest[:2]}"


def _unique(values) -> list[str]:
    return list(dict.fromkeys(values))

# backend/kaizen_booking/services/availability/writer.py
"""
Manual availability blocks.

One row per (practitioner_id, date) holding the slot labels the practitioner
closed by hand. Writes are a single INSERT ... ON CONFLICT DO UPDATE, so
concurrent writers for the same key resolve last-write-wins in the store.
"""

import json
import logging
from datetime import datetime, timezone

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...config import settings
from ...models.generated import Availabilities
from .catalog import is_catalog_slot
from .errors import DependencyFailure, InvalidArgument
from .query import DateWindow, parse_date, require_practitioner_id

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def save_availability_block(
    db: Session,
    practitioner_id: str,
    date,
    unavailable_slots=None,
    strict: bool | None = None,
) -> Availabilities:
    """
    Create or replace the manual block for a practitioner and date.

    Args:
        db: Database session
        practitioner_id: Practitioner ID (required)
        date: ISO date (required)
        unavailable_slots: list of "HH:MM" labels; None clears the block
        strict: reject labels outside the slot catalog
                (defaults to settings.availability_strict_slots)

    Returns:
        The persisted row.

    Raises:
        InvalidArgument: missing/invalid input (no I/O performed)
        DependencyFailure: upsert failed
    """
    practitioner_id = require_practitioner_id(practitioner_id)
    day = parse_date(date, "date")
    if day is None:
        raise InvalidArgument("Practitioner ID and date are required")

    slots = _validate_slots(unavailable_slots, strict)
    now = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")

    try:
        insert = _UPSERT_DIALECTS.get(db.get_bind().dialect.name)
        if insert is None:
            raise DependencyFailure(
                f"Upsert not supported for dialect {db.get_bind().dialect.name}"
            )

        stmt = insert(Availabilities).values(
            practitioner_id=practitioner_id,
            date=day.isoformat(),
            unavailable_slots=json.dumps(slots),
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[Availabilities.practitioner_id, Availabilities.date],
            set_={
                "unavailable_slots": stmt.excluded.unavailable_slots,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        db.execute(stmt)
        db.commit()

        obj = (
            db.query(Availabilities)
            .filter(
                Availabilities.practitioner_id == practitioner_id,
                Availabilities.date == day.isoformat(),
            )
            .one()
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to save availability for {practitioner_id} on {day}: {e}")
        raise DependencyFailure("Failed to save availability") from e

    logger.info(
        f"Availability saved: practitioner={practitioner_id} date={day} slots={slots}"
    )
    return obj


def list_availability_blocks(
    db: Session,
    practitioner_id: str,
    date=None,
    start_date=None,
    end_date=None,
) -> list[Availabilities]:
    """Block rows for a practitioner, ordered by date."""
    practitioner_id = require_practitioner_id(practitioner_id)
    window = DateWindow.parse(date=date, start_date=start_date, end_date=end_date)

    try:
        return (
            db.query(Availabilities)
            .filter(
                Availabilities.practitioner_id == practitioner_id,
                *window.filters(Availabilities.date),
            )
            .order_by(Availabilities.date)
            .all()
        )
    except SQLAlchemyError as e:
        logger.error(f"Failed to fetch availability for {practitioner_id}: {e}")
        raise DependencyFailure("Failed to fetch availability") from e


def _validate_slots(unavailable_slots, strict: bool | None) -> list[str]:
    if unavailable_slots is None:
        return []

    if not isinstance(unavailable_slots, (list, tuple)):
        raise InvalidArgument("Unavailable slots must be an array")
    if not all(isinstance(s, str) for s in unavailable_slots):
        raise InvalidArgument("Unavailable slots must be strings")

    if strict is None:
        strict = settings.availability_strict_slots
    if strict:
        unknown = [s for s in unavailable_slots if not is_catalog_slot(s)]
        if unknown:
            raise InvalidArgument(f"Unknown slots: {', '.join(unknown)}")

    return list(unavailable_slots)

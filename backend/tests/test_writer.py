import json
from datetime import date, datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError

from kaizen_booking.models.generated import Availabilities
from kaizen_booking.services.availability import writer
from kaizen_booking.services.availability import (
    DependencyFailure,
    InvalidArgument,
    list_availability_blocks,
    save_availability_block,
)

from conftest import PRACTITIONER

DAY = "2025-06-02"


def rows(db, practitioner_id=PRACTITIONER):
    db.expire_all()
    return db.query(Availabilities).filter_by(practitioner_id=practitioner_id).all()


def test_creates_row(db):
    obj = save_availability_block(db, PRACTITIONER, DAY, ["09:00", "14:00"])

    assert obj.id is not None
    assert obj.date == DAY
    assert json.loads(obj.unavailable_slots) == ["09:00", "14:00"]
    assert obj.updated_at


def test_upsert_is_idempotent(db):
    save_availability_block(db, PRACTITIONER, DAY, ["09:00"])
    save_availability_block(db, PRACTITIONER, DAY, ["09:00"])

    stored = rows(db)
    assert len(stored) == 1
    assert json.loads(stored[0].unavailable_slots) == ["09:00"]


def test_upsert_replaces_slots_and_keeps_id(db):
    first = save_availability_block(db, PRACTITIONER, DAY, ["09:00"])
    first_id = first.id

    second = save_availability_block(db, PRACTITIONER, DAY, ["10:00", "11:00"])

    assert second.id == first_id
    assert json.loads(second.unavailable_slots) == ["10:00", "11:00"]
    assert len(rows(db)) == 1


def test_missing_slots_clears_block(db):
    save_availability_block(db, PRACTITIONER, DAY, ["09:00"])

    obj = save_availability_block(db, PRACTITIONER, DAY)

    assert json.loads(obj.unavailable_slots) == []


def test_date_object_accepted(db):
    obj = save_availability_block(db, PRACTITIONER, date(2025, 6, 2), ("08:00",))

    assert obj.date == DAY
    assert json.loads(obj.unavailable_slots) == ["08:00"]


def test_out_of_catalog_labels_stored_when_permissive(db):
    obj = save_availability_block(db, PRACTITIONER, DAY, ["12:00"], strict=False)

    assert json.loads(obj.unavailable_slots) == ["12:00"]


def test_out_of_catalog_labels_rejected_when_strict(db):
    with pytest.raises(InvalidArgument):
        save_availability_block(db, PRACTITIONER, DAY, ["09:00", "12:00"], strict=True)

    assert rows(db) == []


@pytest.mark.parametrize(
    "practitioner_id, day, slots",
    [
        (None, DAY, ["09:00"]),
        ("", DAY, ["09:00"]),
        (PRACTITIONER, None, ["09:00"]),
        (PRACTITIONER, "not-a-date", ["09:00"]),
        (PRACTITIONER, "2025-02-30", ["09:00"]),
        (PRACTITIONER, DAY, "09:00"),
        (PRACTITIONER, DAY, {"09:00": True}),
        (PRACTITIONER, DAY, [9]),
    ],
)
def test_invalid_input_performs_no_io(practitioner_id, day, slots):
    class NoIO:
        def __getattr__(self, name):
            pytest.fail(f"data store was accessed: {name}")

    with pytest.raises(InvalidArgument):
        save_availability_block(NoIO(), practitioner_id, day, slots)


def test_store_failure_becomes_dependency_failure(db, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db, "execute", broken)

    with pytest.raises(DependencyFailure):
        save_availability_block(db, PRACTITIONER, DAY, ["09:00"])


def test_list_blocks_window(db):
    for day in ("2025-06-01", "2025-06-02", "2025-06-03"):
        save_availability_block(db, PRACTITIONER, day, ["08:00"])
    save_availability_block(db, "someone-else", "2025-06-02", ["08:00"])

    assert [r.date for r in list_availability_blocks(db, PRACTITIONER)] == [
        "2025-06-01", "2025-06-02", "2025-06-03",
    ]
    assert [r.date for r in list_availability_blocks(db, PRACTITIONER, date="2025-06-02")] == [
        "2025-06-02",
    ]
    assert [
        r.date
        for r in list_availability_blocks(db, PRACTITIONER, start_date="2025-06-02")
    ] == ["2025-06-02", "2025-06-03"]
    assert [
        r.date
        for r in list_availability_blocks(db, PRACTITIONER, end_date="2025-06-02")
    ] == ["2025-06-01", "2025-06-02"]


def test_list_blocks_requires_practitioner(db):
    with pytest.raises(InvalidArgument):
        list_availability_blocks(db, None)


def test_datetime_is_stored_as_its_calendar_day(db):
    save_availability_block(db, PRACTITIONER, datetime(2025, 6, 2, 9, 30), ["09:00"])
    obj = save_availability_block(db, PRACTITIONER, DAY, ["10:00"])

    assert obj.date == DAY
    stored = rows(db)
    assert len(stored) == 1
    assert json.loads(stored[0].unavailable_slots) == ["10:00"]


def test_rewrite_with_same_slots_refreshes_updated_at(db, monkeypatch):
    instants = iter([
        datetime(2025, 1, 1, 10, 0, tzinfo=timezone.utc),
        datetime(2025, 1, 1, 11, 0, tzinfo=timezone.utc),
    ])

    class Clock:
        @staticmethod
        def now(tz=None):
            return next(instants)

    monkeypatch.setattr(writer, "datetime", Clock)

    first = save_availability_block(db, PRACTITIONER, DAY, ["09:00"])
    assert first.updated_at == "2025-01-01 10:00:00"

    save_availability_block(db, PRACTITIONER, DAY, ["09:00"])

    stored = rows(db)
    assert len(stored) == 1
    assert stored[0].updated_at == "2025-01-01 11:00:00"

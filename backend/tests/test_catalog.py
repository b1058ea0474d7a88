import pytest

from kaizen_booking.services.availability import (
    DEFAULT_TIME_SLOTS,
    afternoon_slots,
    display_label,
    is_catalog_slot,
    morning_slots,
)


def test_catalog_order():
    assert morning_slots() == ("08:00", "09:00", "10:00", "11:00")
    assert afternoon_slots() == ("14:00", "15:00", "16:00", "17:00")
    assert DEFAULT_TIME_SLOTS == morning_slots() + afternoon_slots()


@pytest.mark.parametrize(
    "slot, expected",
    [
        ("08:00", "8:00 AM - 9:00 AM"),
        ("09:00", "9:00 AM - 10:00 AM"),
        ("11:00", "11:00 AM - 12:00 PM"),
        ("14:00", "2:00 PM - 3:00 PM"),
        ("17:00", "5:00 PM - 6:00 PM"),
    ],
)
def test_display_label(slot, expected):
    assert display_label(slot) == expected


def test_display_label_noon_and_midnight():
    assert display_label("12:00") == "12:00 PM - 1:00 PM"
    assert display_label("23:00") == "11:00 PM - 12:00 AM"


@pytest.mark.parametrize("bad", ["", "8", "ab:00", "25:00", None])
def test_display_label_rejects_malformed(bad):
    with pytest.raises(ValueError):
        display_label(bad)


def test_is_catalog_slot():
    assert is_catalog_slot("10:00")
    assert not is_catalog_slot("12:00")
    assert not is_catalog_slot("10:30")

from pathlib import Path

from setuptools import find_namespace_packages

BACKEND = Path(__file__).resolve().parents[1]


def test_service_packages_are_discovered():
    packages = find_namespace_packages(where=str(BACKEND), include=["kaizen_booking*"])

    assert "kaizen_booking" in packages
    assert "kaizen_booking.services.availability" in packages
    assert "kaizen_booking.routers" in packages
    assert not any(p.startswith("tests") for p in packages)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from kaizen_booking.database import get_db, get_session_factory, make_engine
from kaizen_booking.main import app
from kaizen_booking.models.generated import Availabilities, Base, Bookings, Users

PRACTITIONER = "prac-1"
PATIENT = "pat-1"


@pytest.fixture
def engine(tmp_path):
    # File DB: the resolver reads from worker threads with separate connections
    engine = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    session.add_all([
        Users(id=PRACTITIONER, email="doc@example.com", full_name="Dr. Lin"),
        Users(id=PATIENT, email="pat@example.com", full_name="Ann Patient"),
    ])
    session.commit()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def add_booking(db):
    def _add(date, time, status="confirmed", practitioner_id=PRACTITIONER, **extra):
        booking = Bookings(
            practitioner_id=practitioner_id,
            patient_id=PATIENT,
            date=date,
            time=time,
            status=status,
            **extra,
        )
        db.add(booking)
        db.commit()
        return booking
    return _add


@pytest.fixture
def add_block(db):
    def _add(date, slots_json, practitioner_id=PRACTITIONER):
        row = Availabilities(
            practitioner_id=practitioner_id,
            date=date,
            unavailable_slots=slots_json,
        )
        db.add(row)
        db.commit()
        return row
    return _add


@pytest.fixture
def client(db, session_factory):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def no_io_factory():
    """Session factory that fails the test if anything opens a session."""
    def _factory():
        pytest.fail("data store was accessed")
    return _factory

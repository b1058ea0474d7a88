from sqlalchemy import Column, ForeignKey, Integer, Text, UniqueConstraint, text

from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()
metadata = Base.metadata


class Users(Base):
    __tablename__ = 'users'

    id = Column(Text, primary_key=True)
    email = Column(Text)
    full_name = Column(Text)
    created_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))

    patient_bookings = relationship(
        'Bookings', back_populates='patient', foreign_keys='Bookings.patient_id'
    )
    practitioner_bookings = relationship(
        'Bookings', back_populates='practitioner', foreign_keys='Bookings.practitioner_id'
    )


class Bookings(Base):
    __tablename__ = 'bookings'

    practitioner_id = Column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    patient_id = Column(ForeignKey('users.id', ondelete='SET NULL'))
    date = Column(Text, nullable=False)  # YYYY-MM-DD
    time = Column(Text, nullable=False)  # HH:MM
    status = Column(Text, nullable=False, server_default=text("'pending'"))
    created_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))
    updated_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))
    id = Column(Integer, primary_key=True)
    service_type = Column(Text)
    reason = Column(Text)
    calendar_event_id = Column(Text)

    patient = relationship('Users', back_populates='patient_bookings', foreign_keys=[patient_id])
    practitioner = relationship(
        'Users', back_populates='practitioner_bookings', foreign_keys=[practitioner_id]
    )


class Availabilities(Base):
    __tablename__ = 'availabilities'
    __table_args__ = (
        UniqueConstraint('practitioner_id', 'date'),
    )

    practitioner_id = Column(Text, nullable=False)
    date = Column(Text, nullable=False)  # YYYY-MM-DD
    unavailable_slots = Column(Text, nullable=False, server_default=text("'[]'"))  # JSON array
    id = Column(Integer, primary_key=True)
    created_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))
    updated_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))

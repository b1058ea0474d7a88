from .generated import Availabilities, Base, Bookings, Users, metadata

__all__ = ["Availabilities", "Base", "Bookings", "Users", "metadata"]

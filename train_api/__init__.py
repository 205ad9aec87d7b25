"""Train Booking API: stations, trips, bookings and payments over FastAPI."""

__version__ = "1.0.0"

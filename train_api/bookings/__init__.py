"""
Booking Module

Seat holds on trips for authenticated users:

- create a pending booking held for one hour
- fetch and list the caller's own bookings
- cancel bookings that have not been paid for

Payment of a booking lives in ``train_api.payments``.
"""

from .router import router
from .service import BookingService
from .schemas import BookingCreateRequest, BookingStatus

__all__ = [
    "router",
    "BookingService",
    "BookingCreateRequest",
    "BookingStatus",
]

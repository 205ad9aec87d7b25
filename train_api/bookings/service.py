import logging
from datetime import timedelta
from typing import List, Tuple

from sqlalchemy.orm import Session, joinedload

from train_api.bookings.schemas import BookingCreateRequest, BookingStatus
from train_api.config import settings
from train_api.exceptions import AuthorizationDeniedError, InvalidRequestError, NotFoundError
from train_api.models import Booking, Payment, Trip
from train_api.utils import utcnow
from train_api.validation import ensure_uuid

logger = logging.getLogger(__name__)


class BookingService:
    """Booking lifecycle: hold, inspect, list and cancel"""

    def __init__(self, db: Session):
        self.db = db

    @property
    def hold_window(self) -> timedelta:
        return timedelta(minutes=settings.BOOKING_HOLD_MINUTES)

    def create_booking(self, user_id: str, request: BookingCreateRequest) -> Booking:
        """Create a pending booking held for the configured window"""
        trip = self.db.query(Trip).filter(Trip.id == request.trip_id).first()
        if not trip:
            raise NotFoundError("Trip not found")

        if request.has_bicycle and not trip.bicycles_allowed:
            raise InvalidRequestError("Bicycles are not allowed on this trip")

        if request.has_dog and not trip.dogs_allowed:
            raise InvalidRequestError("Dogs are not allowed on this trip")

        created_at = utcnow()
        booking = Booking(
            trip_id=trip.id,
            user_id=user_id,
            passenger_name=request.passenger_name,
            has_bicycle=request.has_bicycle,
            has_dog=request.has_dog,
            status=BookingStatus.PENDING.value,
            created_at=created_at,
            expires_at=created_at + self.hold_window,
        )
        self.db.add(booking)
        self.db.commit()
        self.db.refresh(booking)

        logger.info("Created booking %s on trip %s for user %s", booking.id, trip.id, user_id)
        return booking

    def get_booking(self, booking_id: str, user_id: str) -> Booking:
        """Get a booking owned by the caller, with trip and stations loaded"""
        booking_id = ensure_uuid(booking_id, "booking")

        booking = self.db.query(Booking).options(
            joinedload(Booking.trip).joinedload(Trip.origin),
            joinedload(Booking.trip).joinedload(Trip.destination)
        ).filter(Booking.id == booking_id).first()

        self._check_access(booking, user_id)
        return booking

    def list_bookings(self, user_id: str, offset: int = 0, limit: int = 10) -> Tuple[List[Booking], int]:
        """The caller's bookings, newest first"""
        query = self.db.query(Booking).filter(Booking.user_id == user_id)

        total = query.count()
        bookings = query.options(
            joinedload(Booking.trip).joinedload(Trip.origin),
            joinedload(Booking.trip).joinedload(Trip.destination)
        ).order_by(Booking.created_at.desc(), Booking.id.desc()).offset(offset).limit(limit).all()

        return bookings, total

    def cancel_booking(self, booking_id: str, user_id: str) -> None:
        """Delete a booking that has not been paid for"""
        booking_id = ensure_uuid(booking_id, "booking")

        booking = self.db.query(Booking).filter(Booking.id == booking_id).with_for_update().first()
        self._check_access(booking, user_id)

        if booking.status == BookingStatus.CONFIRMED.value:
            self.db.rollback()
            raise InvalidRequestError("Cannot cancel a confirmed booking")

        charging = self.db.query(Payment.id).filter(
            Payment.booking_id == booking.id,
            Payment.status == "pending"
        ).first()
        if charging:
            self.db.rollback()
            logger.warning("Rejected cancellation of booking %s: payment in progress", booking_id)
            raise InvalidRequestError("Payment in progress")

        self.db.delete(booking)
        self.db.commit()

        logger.info("Cancelled booking %s for user %s", booking_id, user_id)

    def _check_access(self, booking: Booking, user_id: str) -> None:
        if not booking:
            raise NotFoundError("Booking not found")
        if booking.user_id != user_id:
            raise AuthorizationDeniedError("Access denied to this booking")


def is_expired(booking: Booking) -> bool:
    return booking.status == BookingStatus.PENDING.value and booking.expires_at < utcnow()

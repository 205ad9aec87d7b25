import json
import logging
from typing import Any, Dict, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from train_api.bookings.schemas import BookingStatus
from train_api.exceptions import (
    APIError, AuthorizationDeniedError, ConflictError, InvalidRequestError, NotFoundError
)
from train_api.models import Booking, Payment, Trip
from train_api.payments.masking import mask_payment_source
from train_api.payments.processor import PaymentProcessor
from train_api.payments.schemas import PaymentRequest, PaymentStatus
from train_api.utils import utcnow
from train_api.validation import ensure_uuid

logger = logging.getLogger(__name__)


class PaymentService:
    """Reconciles a payment attempt with the booking it pays for"""

    def __init__(self, db: Session, processor: PaymentProcessor):
        self.db = db
        self.processor = processor

    def submit_payment(
        self,
        booking_id: str,
        user_id: str,
        request: PaymentRequest
    ) -> Tuple[Payment, Dict[str, Any]]:
        """Charge a pending booking and confirm it when the charge succeeds.

        Returns the stored payment and its masked source.
        """
        booking_id = ensure_uuid(booking_id, "booking")

        # Checks run under a row lock so concurrent attempts serialise on the booking
        booking = self._lock_booking(booking_id)
        try:
            self._check_payable(booking, user_id, request)
        except APIError:
            self.db.rollback()
            raise

        masked_source = mask_payment_source(request.source)
        payment = Payment(
            booking_id=booking_id,
            amount=request.amount,
            currency=request.currency,
            source_type=request.source.object,
            source_details=json.dumps(masked_source),
            status=PaymentStatus.PENDING.value,
        )
        self.db.add(payment)
        self.db.commit()
        self.db.refresh(payment)

        try:
            succeeded = self.processor.process(request.source, request.amount, request.currency)
        except Exception:
            logger.exception("Payment processor failed for payment %s", payment.id)
            self._mark_failed(payment.id)
            raise

        self._record_outcome(payment, booking_id, succeeded)
        return payment, masked_source

    def _lock_booking(self, booking_id: str) -> Booking:
        return self.db.query(Booking).join(Trip).filter(
            Booking.id == booking_id
        ).with_for_update(of=Booking).first()

    def _check_payable(self, booking: Booking, user_id: str, request: PaymentRequest) -> None:
        if not booking:
            raise NotFoundError("Booking not found")

        if booking.user_id != user_id:
            raise AuthorizationDeniedError("Access denied to this booking")

        already_paid = self.db.query(Payment.id).filter(
            Payment.booking_id == booking.id,
            Payment.status == PaymentStatus.SUCCEEDED.value
        ).first()
        if already_paid:
            logger.warning("Rejected payment for booking %s: already paid", booking.id)
            raise ConflictError("Booking is already paid")

        if booking.expires_at < utcnow():
            logger.warning("Rejected payment for booking %s: hold expired", booking.id)
            raise InvalidRequestError("Booking has expired")

        price = booking.trip.price
        if request.amount != price:
            logger.warning(
                "Rejected payment for booking %s: amount %s does not match price %s",
                booking.id, request.amount, price
            )
            raise InvalidRequestError(f"Payment amount must match trip price of {price}")

    def _record_outcome(self, payment: Payment, booking_id: str, succeeded: bool) -> None:
        """Write payment and booking status in a single transaction"""
        booking = self.db.query(Booking).filter(Booking.id == booking_id).with_for_update().first()
        if not booking:
            # removed while the charge was in flight; its pending payment went with it
            payment_id = payment.id
            self.db.rollback()
            logger.error(
                "Booking %s disappeared while payment %s was processed (approved=%s)",
                booking_id, payment_id, succeeded
            )
            raise NotFoundError("Booking not found")

        payment.status = (PaymentStatus.SUCCEEDED if succeeded else PaymentStatus.FAILED).value
        if succeeded:
            booking.status = BookingStatus.CONFIRMED.value

        try:
            self.db.commit()
        except IntegrityError:
            # another attempt for the same booking succeeded first
            self.db.rollback()
            logger.warning("Payment %s lost a race for booking %s", payment.id, booking_id)
            self._mark_failed(payment.id)
            raise ConflictError("Booking is already paid")

        self.db.refresh(payment)
        logger.info("Payment %s for booking %s %s", payment.id, booking_id, payment.status)

    def _mark_failed(self, payment_id: str) -> None:
        self.db.rollback()
        self.db.query(Payment).filter(Payment.id == payment_id).update(
            {Payment.status: PaymentStatus.FAILED.value, Payment.updated_at: utcnow()},
            synchronize_session=False
        )
        self.db.commit()

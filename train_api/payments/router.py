from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from train_api.auth import CurrentUser, get_current_user
from train_api.database import get_db
from train_api.pagination import api_url
from train_api.payments.processor import PaymentProcessor, get_payment_processor
from train_api.payments.schemas import PaymentRequest, PaymentResponse
from train_api.payments.service import PaymentService

router = APIRouter()


@router.post("/{booking_id}/payment", response_model=PaymentResponse)
def submit_payment(
    booking_id: str,
    payment_request: PaymentRequest,
    request: Request,
    response: Response,
    current_user: CurrentUser = Depends(get_current_user),
    processor: PaymentProcessor = Depends(get_payment_processor),
    db: Session = Depends(get_db)
):
    """Pay for a pending booking"""
    payment_service = PaymentService(db, processor)
    payment, masked_source = payment_service.submit_payment(booking_id, current_user.id, payment_request)

    response.headers["Cache-Control"] = "no-cache"
    return {
        "id": payment.id,
        "amount": float(payment.amount),
        "currency": payment.currency,
        "source": masked_source,
        "status": payment.status,
        "links": {
            "booking": api_url(request, f"/bookings/{payment.booking_id}"),
        },
    }

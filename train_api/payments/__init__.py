"""
Payment Module

Settles pending bookings:

- masking.py: strips payment instruments down to storable fields
- processor.py: gateway interface and the random-outcome simulator
- service.py: amount/expiry/ownership checks and the atomic status update
- router.py: ``POST /bookings/{id}/payment``
"""

from .router import router
from .processor import PaymentProcessor, SimulatedPaymentProcessor, get_payment_processor
from .service import PaymentService

__all__ = [
    "router",
    "PaymentProcessor",
    "SimulatedPaymentProcessor",
    "get_payment_processor",
    "PaymentService",
]

import logging
import random
import time
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

from train_api.config import settings
from train_api.payments.schemas import PaymentSource

logger = logging.getLogger(__name__)


class PaymentProcessor(ABC):
    """Gateway that charges a payment source.

    Implementations return ``True`` when the charge is accepted and ``False``
    when it is declined. Raising means the gateway itself failed.
    """

    @abstractmethod
    def process(self, source: PaymentSource, amount: Decimal, currency: str) -> bool:
        raise NotImplementedError


class SimulatedPaymentProcessor(PaymentProcessor):
    """Stand-in gateway that approves most charges at random"""

    def __init__(
        self,
        success_rate: float = 0.9,
        delay_ms: int = 0,
        rng: Optional[random.Random] = None
    ):
        if not 0.0 <= success_rate <= 1.0:
            raise ValueError("success_rate must be between 0 and 1")
        self.success_rate = success_rate
        self.delay_ms = delay_ms
        self._rng = rng or random.Random()

    def process(self, source: PaymentSource, amount: Decimal, currency: str) -> bool:
        if self.delay_ms:
            time.sleep(self.delay_ms / 1000)

        approved = self._rng.random() < self.success_rate
        logger.debug(
            "Simulated %s charge of %s %s: %s",
            source.object, amount, currency.upper(), "approved" if approved else "declined"
        )
        return approved


def get_payment_processor() -> PaymentProcessor:
    """FastAPI dependency; override it to plug in a real gateway"""
    return SimulatedPaymentProcessor(
        success_rate=settings.PAYMENT_SUCCESS_RATE,
        delay_ms=settings.PAYMENT_PROCESSING_DELAY_MS,
    )

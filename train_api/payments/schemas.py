from pydantic import BaseModel, Field, validator
from typing import Dict, Literal, Optional, Union
from datetime import date
from decimal import Decimal
from enum import Enum

from train_api.validation import SUPPORTED_CURRENCIES


class PaymentStatus(str, Enum):
    """Payment status enumeration"""
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class CardSource(BaseModel):
    object: Literal["card"]
    name: str = Field(..., min_length=1)
    number: str = Field(..., pattern=r"^\d{13,19}$")
    cvc: str = Field(..., pattern=r"^\d{3,4}$")
    exp_month: int = Field(..., ge=1, le=12)
    exp_year: int
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    address_city: Optional[str] = None
    address_country: str = Field(..., min_length=2, max_length=2)
    address_post_code: Optional[str] = None

    @validator('exp_year')
    def validate_exp_year(cls, v):
        if v < date.today().year:
            raise ValueError('card has expired')
        return v


class BankAccountSource(BaseModel):
    object: Literal["bank_account"]
    name: str = Field(..., min_length=1)
    number: str = Field(..., pattern=r"^\d{4,34}$")
    sort_code: str = Field(..., pattern=r"^\d{6}$")
    account_type: Literal["individual", "company"]
    bank_name: str = Field(..., min_length=1)
    country: str = Field(..., min_length=2, max_length=2)


PaymentSource = Union[CardSource, BankAccountSource]


class PaymentRequest(BaseModel):
    """Payment submitted against a pending booking"""
    amount: Decimal = Field(..., gt=0)
    currency: str
    source: PaymentSource = Field(..., discriminator="object")

    @validator('currency')
    def validate_currency(cls, v):
        v = v.lower()
        if v not in SUPPORTED_CURRENCIES:
            raise ValueError(f"currency must be one of {', '.join(SUPPORTED_CURRENCIES)}")
        return v


class PaymentResponse(BaseModel):
    id: str
    amount: float
    currency: str
    source: Dict[str, Union[str, int, None]]
    status: PaymentStatus
    links: Dict[str, str]

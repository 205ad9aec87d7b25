from pydantic import BaseModel, Field, validator
from typing import Dict, List, Optional
from enum import Enum

from train_api.pagination import PaginationLinks
from train_api.validation import is_valid_uuid


class BookingStatus(str, Enum):
    """Booking status enumeration"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class BookingCreateRequest(BaseModel):
    """Request to hold a seat on a trip"""
    trip_id: str
    passenger_name: str = Field(..., min_length=1, max_length=255)
    has_bicycle: bool = False
    has_dog: bool = False

    @validator('trip_id')
    def validate_trip_id(cls, v):
        if not is_valid_uuid(v):
            raise ValueError('trip_id must be a UUID')
        return v.lower()

    @validator('passenger_name')
    def validate_passenger_name(cls, v):
        if not v.strip():
            raise ValueError('passenger_name must not be blank')
        return v.strip()


class BookingTrip(BaseModel):
    """Trip details denormalised onto a booking"""
    id: str
    origin: str
    origin_name: str
    destination: str
    destination_name: str
    departure_time: str
    arrival_time: str
    operator: str
    price: float


class Booking(BaseModel):
    id: str
    trip_id: str
    passenger_name: str
    has_bicycle: bool
    has_dog: bool
    status: BookingStatus
    expires_at: str
    created_at: str
    is_expired: bool
    trip: Optional[BookingTrip] = None
    links: Dict[str, str]


class BookingList(BaseModel):
    data: List[Booking]
    links: PaginationLinks

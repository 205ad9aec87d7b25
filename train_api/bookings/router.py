from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from train_api.auth import CurrentUser, get_current_user, require_write_scope
from train_api.bookings.schemas import Booking, BookingCreateRequest, BookingList
from train_api.bookings.service import BookingService, is_expired
from train_api.database import get_db
from train_api.models import Booking as BookingModel
from train_api.pagination import PaginationParams, api_url, build_pagination_links, collection_url, pagination_params
from train_api.utils import isoformat_z

router = APIRouter()

CACHE_CONTROL = "no-cache"


def serialize_booking(request: Request, booking: BookingModel) -> dict:
    booking_data = {
        "id": booking.id,
        "trip_id": booking.trip_id,
        "passenger_name": booking.passenger_name,
        "has_bicycle": booking.has_bicycle,
        "has_dog": booking.has_dog,
        "status": booking.status,
        "expires_at": isoformat_z(booking.expires_at),
        "created_at": isoformat_z(booking.created_at),
        "is_expired": is_expired(booking),
        "trip": None,
        "links": {
            "self": api_url(request, f"/bookings/{booking.id}"),
            "trip": api_url(request, f"/trips/{booking.trip_id}"),
        },
    }

    trip = booking.trip
    if trip:
        booking_data["trip"] = {
            "id": trip.id,
            "origin": trip.origin_id,
            "origin_name": trip.origin.name if trip.origin else "",
            "destination": trip.destination_id,
            "destination_name": trip.destination.name if trip.destination else "",
            "departure_time": isoformat_z(trip.departure_time),
            "arrival_time": isoformat_z(trip.arrival_time),
            "operator": trip.operator,
            "price": float(trip.price),
        }

    return booking_data


@router.get("", response_model=BookingList)
def list_bookings(
    request: Request,
    response: Response,
    paging: PaginationParams = Depends(pagination_params),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the caller's bookings, newest first"""
    booking_service = BookingService(db)
    bookings, total = booking_service.list_bookings(
        current_user.id, offset=paging.offset, limit=paging.limit
    )

    response.headers["Cache-Control"] = CACHE_CONTROL
    return {
        "data": [serialize_booking(request, booking) for booking in bookings],
        "links": build_pagination_links(collection_url(request), paging.page, paging.limit, total),
    }


@router.post("", response_model=Booking, status_code=status.HTTP_201_CREATED)
def create_booking(
    booking_request: BookingCreateRequest,
    request: Request,
    response: Response,
    current_user: CurrentUser = Depends(require_write_scope),
    db: Session = Depends(get_db)
):
    """Hold a seat on a trip for the caller"""
    booking_service = BookingService(db)
    booking = booking_service.create_booking(current_user.id, booking_request)

    response.headers["Cache-Control"] = CACHE_CONTROL
    response.headers["Location"] = api_url(request, f"/bookings/{booking.id}")
    return serialize_booking(request, booking)


@router.get("/{booking_id}", response_model=Booking)
def get_booking(
    booking_id: str,
    request: Request,
    response: Response,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get one of the caller's bookings"""
    booking_service = BookingService(db)
    booking = booking_service.get_booking(booking_id, current_user.id)

    response.headers["Cache-Control"] = CACHE_CONTROL
    return serialize_booking(request, booking)


@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
def cancel_booking(
    booking_id: str,
    current_user: CurrentUser = Depends(require_write_scope),
    db: Session = Depends(get_db)
):
    """Cancel a booking that has not been paid for"""
    booking_service = BookingService(db)
    booking_service.cancel_booking(booking_id, current_user.id)

    return Response(status_code=status.HTTP_204_NO_CONTENT, headers={"Cache-Control": CACHE_CONTROL})

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.orm import Session
from typing import Optional

from train_api.database import get_db
from train_api.models import Trip
from train_api.pagination import (
    PaginationParams, api_url, build_pagination_links, collection_url, pagination_params
)
from train_api.trips.schemas import TripDetail, TripList, TripSearch
from train_api.trips.service import TripService
from train_api.utils import isoformat_z

router = APIRouter()

CACHE_CONTROL = "public, max-age=300"


def serialize_trip(request: Request, trip: Trip) -> dict:
    return {
        "id": trip.id,
        "origin": trip.origin_id,
        "destination": trip.destination_id,
        "departure_time": isoformat_z(trip.departure_time),
        "arrival_time": isoformat_z(trip.arrival_time),
        "operator": trip.operator,
        "price": float(trip.price),
        "bicycles_allowed": trip.bicycles_allowed,
        "dogs_allowed": trip.dogs_allowed,
        "links": {
            "self": api_url(request, f"/trips/{trip.id}"),
            "origin": api_url(request, f"/stations/{trip.origin_id}"),
            "destination": api_url(request, f"/stations/{trip.destination_id}"),
        },
    }


@router.get("", response_model=TripList)
def list_trips(
    request: Request,
    response: Response,
    origin: str = Query(..., description="Origin station ID"),
    destination: str = Query(..., description="Destination station ID"),
    date: str = Query(..., description="Departure day (ISO-8601 date or datetime)"),
    bicycles: Optional[bool] = Query(None, description="Only trips that allow bicycles"),
    dogs: Optional[bool] = Query(None, description="Only trips that allow dogs"),
    paging: PaginationParams = Depends(pagination_params),
    db: Session = Depends(get_db)
):
    """Search trips between two stations on a given day"""
    search = TripSearch(
        origin=origin,
        destination=destination,
        date=date,
        bicycles=bicycles,
        dogs=dogs
    )

    trips, total = TripService.list_trips(db, search, offset=paging.offset, limit=paging.limit)

    links = build_pagination_links(
        collection_url(request),
        paging.page,
        paging.limit,
        total,
        extra_params={"origin": origin, "destination": destination, "date": date},
    )

    response.headers["Cache-Control"] = CACHE_CONTROL
    return {
        "data": [serialize_trip(request, trip) for trip in trips],
        "links": links,
    }


@router.get("/{trip_id}", response_model=TripDetail)
def get_trip(trip_id: str, request: Request, response: Response, db: Session = Depends(get_db)):
    """Get trip details by ID"""
    trip = TripService.get_trip(db, trip_id)

    trip_data = serialize_trip(request, trip)
    trip_data["origin_station"] = trip.origin
    trip_data["destination_station"] = trip.destination

    response.headers["Cache-Control"] = CACHE_CONTROL
    return trip_data

from sqlalchemy.orm import Session, joinedload
from typing import List, Tuple

from train_api.exceptions import NotFoundError
from train_api.models import Trip
from train_api.trips.schemas import TripSearch
from train_api.validation import ensure_uuid, parse_search_date, utc_day_bounds


class TripService:
    @staticmethod
    def get_trip(db: Session, trip_id: str) -> Trip:
        """Get trip by ID with its origin and destination stations"""
        trip_id = ensure_uuid(trip_id, "trip")
        trip = db.query(Trip).options(
            joinedload(Trip.origin),
            joinedload(Trip.destination)
        ).filter(Trip.id == trip_id).first()
        if not trip:
            raise NotFoundError("Trip not found")
        return trip

    @staticmethod
    def list_trips(
        db: Session,
        search: TripSearch,
        offset: int = 0,
        limit: int = 10
    ) -> Tuple[List[Trip], int]:
        """Trips between two stations departing on the given UTC day"""
        origin = ensure_uuid(search.origin, "origin")
        destination = ensure_uuid(search.destination, "destination")
        start_of_day, end_of_day = utc_day_bounds(parse_search_date(search.date))

        query = db.query(Trip).filter(
            Trip.origin_id == origin,
            Trip.destination_id == destination,
            Trip.departure_time >= start_of_day,
            Trip.departure_time <= end_of_day
        )

        # False means "no preference", not "must be disallowed"
        if search.bicycles is True:
            query = query.filter(Trip.bicycles_allowed == True)  # noqa: E712
        if search.dogs is True:
            query = query.filter(Trip.dogs_allowed == True)  # noqa: E712

        total = query.count()
        trips = query.order_by(Trip.departure_time.asc()).offset(offset).limit(limit).all()

        return trips, total

from sqlalchemy import or_
from sqlalchemy.orm import Session
from typing import List, Optional, Tuple

from train_api.exceptions import NotFoundError
from train_api.models import Station
from train_api.stations.schemas import StationSearch
from train_api.validation import ensure_uuid

LIKE_ESCAPE = "\\"


def escape_like(text: str) -> str:
    """Make LIKE wildcards in user text match literally"""
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class StationService:
    @staticmethod
    def get_station(db: Session, station_id: str) -> Station:
        """Get station by ID"""
        station_id = ensure_uuid(station_id, "station")
        station = db.query(Station).filter(Station.id == station_id).first()
        if not station:
            raise NotFoundError("Station not found")
        return station

    @staticmethod
    def list_stations(
        db: Session,
        offset: int = 0,
        limit: int = 10,
        search: Optional[StationSearch] = None
    ) -> Tuple[List[Station], int]:
        """Get stations ordered by name with optional text and country filters"""
        query = db.query(Station)

        if search:
            if search.search:
                pattern = f"%{escape_like(search.search)}%"
                query = query.filter(
                    or_(
                        Station.name.ilike(pattern, escape=LIKE_ESCAPE),
                        Station.address.ilike(pattern, escape=LIKE_ESCAPE)
                    )
                )

            if search.country:
                query = query.filter(Station.country_code == search.country)

            # coordinates are accepted but do not change the ordering yet

        total = query.count()
        stations = query.order_by(Station.name.asc()).offset(offset).limit(limit).all()

        return stations, total

from fastapi import APIRouter, Depends, Query, Request, Response
from pydantic import ValidationError
from sqlalchemy.orm import Session
from typing import Optional

from train_api.database import get_db
from train_api.exceptions import InvalidRequestError
from train_api.pagination import PaginationParams, build_pagination_links, collection_url, pagination_params
from train_api.stations.schemas import Station, StationList, StationSearch
from train_api.stations.service import StationService

router = APIRouter()

CACHE_CONTROL = "public, max-age=3600"


@router.get("", response_model=StationList)
def list_stations(
    request: Request,
    response: Response,
    search: Optional[str] = Query(None, description="Match station name or address"),
    country: Optional[str] = Query(None, description="Two-letter country code"),
    coordinates: Optional[str] = Query(None, description="Sort hint as 'lat,lng'"),
    paging: PaginationParams = Depends(pagination_params),
    db: Session = Depends(get_db)
):
    """List stations with optional search and country filters"""
    try:
        filters = StationSearch(search=search, country=country, coordinates=coordinates)
    except ValidationError as e:
        raise InvalidRequestError(
            "; ".join(f"{err['loc'][0]}: {err['msg']}" for err in e.errors())
        )

    stations, total = StationService.list_stations(
        db, offset=paging.offset, limit=paging.limit, search=filters
    )

    response.headers["Cache-Control"] = CACHE_CONTROL
    return {
        "data": stations,
        "links": build_pagination_links(
            collection_url(request),
            paging.page,
            paging.limit,
            total,
            extra_params={
                name: value
                for name, value in (("search", search), ("country", country), ("coordinates", coordinates))
                if value is not None
            },
        ),
    }


@router.get("/{station_id}", response_model=Station)
def get_station(station_id: str, response: Response, db: Session = Depends(get_db)):
    """Get station details by ID"""
    response.headers["Cache-Control"] = CACHE_CONTROL
    return StationService.get_station(db, station_id)

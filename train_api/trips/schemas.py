from pydantic import BaseModel
from typing import Dict, List, Optional

from train_api.pagination import PaginationLinks
from train_api.stations.schemas import Station


class TripSearch(BaseModel):
    origin: str
    destination: str
    date: str
    bicycles: Optional[bool] = None
    dogs: Optional[bool] = None


class TripSummary(BaseModel):
    id: str
    origin: str
    destination: str
    departure_time: str
    arrival_time: str
    operator: str
    price: float
    bicycles_allowed: bool
    dogs_allowed: bool
    links: Dict[str, str]


class TripDetail(TripSummary):
    origin_station: Station
    destination_station: Station


class TripList(BaseModel):
    data: List[TripSummary]
    links: PaginationLinks

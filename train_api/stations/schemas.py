from pydantic import BaseModel, Field, validator
from typing import List, Optional

from train_api.pagination import PaginationLinks
from train_api.validation import is_valid_coordinates


class Station(BaseModel):
    id: str
    name: str
    address: str
    country_code: str
    timezone: str

    class Config:
        from_attributes = True


class StationSearch(BaseModel):
    search: Optional[str] = None
    country: Optional[str] = Field(None, min_length=2, max_length=2)
    coordinates: Optional[str] = None

    @validator('country')
    def normalise_country(cls, v):
        return v.upper() if v else v

    @validator('coordinates')
    def validate_coordinates(cls, v):
        if v is not None and not is_valid_coordinates(v):
            raise ValueError('coordinates must look like "52.52,13.37"')
        return v


class StationList(BaseModel):
    data: List[Station]
    links: PaginationLinks

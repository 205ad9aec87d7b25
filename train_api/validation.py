import re
from datetime import date, datetime, time, timedelta
from typing import Tuple

from train_api.exceptions import InvalidRequestError
from train_api.utils import to_naive_utc

UUID_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)
COORDINATES_PATTERN = re.compile(r"^-?\d+\.?\d*,-?\d+\.?\d*$")
COUNTRY_CODE_PATTERN = re.compile(r"^[A-Za-z]{2}$")

SUPPORTED_CURRENCIES = ("bam", "bgn", "chf", "eur", "gbp", "nok", "sek", "try")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def is_valid_uuid(value: str) -> bool:
    return bool(value) and UUID_PATTERN.match(value) is not None


def ensure_uuid(value: str, label: str) -> str:
    """Reject identifiers that are not UUID strings before any lookup"""
    if not is_valid_uuid(value):
        raise InvalidRequestError(f"Invalid {label} ID format")
    return value.lower()


def is_valid_coordinates(value: str) -> bool:
    return COORDINATES_PATTERN.match(value) is not None


def parse_search_date(value: str) -> date:
    """Accept either a calendar date or a full ISO-8601 datetime"""
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return to_naive_utc(datetime.fromisoformat(value.replace("Z", "+00:00"))).date()
    except ValueError:
        raise InvalidRequestError("date: must be an ISO-8601 date or datetime")


def utc_day_bounds(day: date) -> Tuple[datetime, datetime]:
    """First and last millisecond of a UTC calendar day, both inclusive"""
    start = datetime.combine(day, time.min)
    end = start + timedelta(days=1) - timedelta(milliseconds=1)
    return start, end

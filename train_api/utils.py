from datetime import datetime, timezone
from typing import Optional
import uuid


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, matching how timestamps are stored"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Normalise an aware datetime to naive UTC; naive values are assumed UTC"""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def isoformat_z(value: Optional[datetime]) -> Optional[str]:
    """Render a stored timestamp as ISO-8601 with milliseconds and a Z suffix"""
    if value is None:
        return None
    value = to_naive_utc(value)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def generate_id() -> str:
    return str(uuid.uuid4())

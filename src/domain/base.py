import uuid
from datetime import UTC, datetime
from typing import Optional


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every DateTime column is stored in"""
    return datetime.now(UTC).replace(tzinfo=None)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Mark a stored naive UTC timestamp as UTC so it serializes with an offset"""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)

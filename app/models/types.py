import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB


# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests/dev)
JSONList = JSON().with_variant(JSONB(), "postgresql")


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    # Microsecond precision; SQLite's CURRENT_TIMESTAMP only has whole seconds
    return datetime.now(timezone.utc)

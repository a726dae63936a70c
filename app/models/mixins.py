# app/models/mixins.py
"""
Shared columns for every table: string UUID primary keys and
created_at / updated_at bookkeeping.
"""

import uuid
from datetime import datetime, timedelta

from sqlalchemy import Column, DateTime, String, event


def new_id() -> str:
    return str(uuid.uuid4())


def next_timestamp(previous: datetime = None) -> datetime:
    """Current UTC time, nudged forward so it is always later than `previous`."""
    now = datetime.utcnow()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


class IdMixin:
    id = Column(String(36), primary_key=True, default=new_id)


class CreatedMixin:
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)


class TimestampMixin(CreatedMixin):
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow)


@event.listens_for(TimestampMixin, "before_update", propagate=True)
def _refresh_updated_at(mapper, connection, target):
    target.updated_at = next_timestamp(target.updated_at)

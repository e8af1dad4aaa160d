"""
Vidly Backend — Shared Column Types
====================================

What:  UTCDateTime, a timezone-aware timestamp column that always reads back
       as an aware UTC datetime.
Why:   PostgreSQL returns TIMESTAMPTZ values with their offset, but SQLite
       stores no zone and hands back naive datetimes. Without this, a rental
       serialized right after creation ("...Z") and the same rental read
       back later (no zone) would differ.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime
from sqlalchemy.types import TypeDecorator


class UTCDateTime(TypeDecorator):
    """DateTime(timezone=True) that stores UTC and loads aware UTC values."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        # Naive values are taken to be UTC already
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

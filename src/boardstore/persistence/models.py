"""
Single-table schema: every record of every store lives in ``records``;
``stores`` pins the bounds each store was created with.
"""

import datetime as dt

from sqlalchemy import JSON, Column, DateTime, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def now_utc() -> dt.datetime:  # compact timezone‑aware timestamp
    return dt.datetime.now(tz=dt.timezone.utc)


class StoreRow(Base):
    """One row per named store; bounds are fixed at first open."""

    __tablename__ = "stores"

    name = Column(String, primary_key=True)
    max_key_size = Column(Integer, nullable=False)
    max_value_size = Column(Integer, nullable=False)
    capacity = Column(Integer, nullable=True)
    created_ts = Column(DateTime(timezone=True), default=now_utc, nullable=False)


class RecordRow(Base):
    """Current version of one record in one store."""

    __tablename__ = "records"

    store = Column(String, primary_key=True)
    key = Column(String, primary_key=True)
    data = Column(JSON, nullable=False)
    updated_ts = Column(
        DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False
    )

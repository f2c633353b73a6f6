"""
Thin data-access layer around the ``records`` table.

One :class:`RecordStore` per named store; all stores share the table and are
told apart by the ``store`` column. Every write runs in a single transaction,
so a failed write leaves the previous record in place.
"""

from __future__ import annotations

import json
import logging
import threading
from contextlib import contextmanager
from typing import Generic, Iterator, List, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.record import Record
from ..core.result import BoundsExceededError, StorageFailureError, StoreConfigError
from .models import RecordRow, StoreRow

LOGGER = logging.getLogger(__name__)

# StableBTreeMap(0, 44, 1024) bounds of the original board canisters
MAX_KEY_SIZE = 44
MAX_VALUE_SIZE = 1024

R = TypeVar("R", bound=Record)


def encoded_size(data: dict) -> int:
    return len(json.dumps(data, separators=(",", ":")).encode("utf-8"))


class RecordStore(Generic[R]):
    """Durable ``key -> record`` mapping with bounds fixed at creation."""

    def __init__(
        self,
        engine: Engine,
        name: str,
        model: Type[R],
        *,
        max_key_size: int = MAX_KEY_SIZE,
        max_value_size: int = MAX_VALUE_SIZE,
        capacity: int | None = None,
    ):
        self.engine = engine
        self.name = name
        self.model = model
        self.max_key_size = max_key_size
        self.max_value_size = max_value_size
        self.capacity = capacity
        # one operation at a time per store; re-entrant so services can hold it
        self.lock = threading.RLock()
        self._register()

    def _new_session(self) -> Session:  # separate to keep pylint happy
        return Session(bind=self.engine, future=True)

    @contextmanager
    def _storage_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            LOGGER.error("Store %s: %s failed: %s", self.name, action, exc)
            raise StorageFailureError(
                f"An error occurred while trying to {action} in store {self.name}"
            ) from exc

    def _register(self) -> None:
        """Persist this store's bounds on first open, verify them afterwards."""
        with self._storage_errors("register the store"):
            with self._new_session() as s, s.begin():
                row = s.get(StoreRow, self.name)
                if row is None:
                    s.add(
                        StoreRow(
                            name=self.name,
                            max_key_size=self.max_key_size,
                            max_value_size=self.max_value_size,
                            capacity=self.capacity,
                        )
                    )
                    LOGGER.info(
                        "Created store %s (key<=%d B, value<=%d B, capacity=%s)",
                        self.name,
                        self.max_key_size,
                        self.max_value_size,
                        self.capacity,
                    )
                    return
                persisted = (row.max_key_size, row.max_value_size, row.capacity)
        if persisted != (self.max_key_size, self.max_value_size, self.capacity):
            raise StoreConfigError(
                f"Store {self.name} was created with bounds {persisted}, "
                f"got {(self.max_key_size, self.max_value_size, self.capacity)}"
            )

    # ---- bounds ---------------------------------------------------------
    def check_bounds(self, key: str, record: R) -> dict:
        """Return the persisted form of ``record`` or raise BoundsExceededError."""
        key_size = len(key.encode("utf-8"))
        if key_size > self.max_key_size:
            raise BoundsExceededError(
                f"Key of {key_size} bytes exceeds the {self.max_key_size} byte limit"
            )
        data = record.dump()
        size = encoded_size(data)
        if size > self.max_value_size:
            raise BoundsExceededError(
                f"Record of {size} bytes exceeds the {self.max_value_size} byte limit"
            )
        return data

    # ---- writes ---------------------------------------------------------
    def put(self, key: str, record: R) -> None:
        """Insert or overwrite ``key``. Bounds are checked before any I/O."""
        data = self.check_bounds(key, record)
        with self.lock, self._storage_errors("insert a record"):
            with self._new_session() as s, s.begin():
                row = s.get(RecordRow, (self.name, key))
                if row is not None:
                    row.data = data
                    return
                if self.capacity is not None and self._count(s) >= self.capacity:
                    raise StorageFailureError(
                        f"Store {self.name} is full ({self.capacity} records)"
                    )
                s.add(RecordRow(store=self.name, key=key, data=data))

    def remove(self, key: str) -> R | None:
        """Delete ``key`` and return what was stored there, or None."""
        with self.lock, self._storage_errors("remove a record"):
            with self._new_session() as s, s.begin():
                row = s.get(RecordRow, (self.name, key))
                if row is None:
                    return None
                record = self.model.model_validate(row.data)
                s.delete(row)
                return record

    # ---- reads ----------------------------------------------------------
    def get(self, key: str) -> R | None:
        with self._storage_errors("retrieve a record"):
            with self._new_session() as s:
                row = s.get(RecordRow, (self.name, key))
                return None if row is None else self.model.model_validate(row.data)

    def values(self) -> List[R]:
        """Point-in-time copy of every record, ordered by key."""
        with self._storage_errors("retrieve records"):
            with self._new_session() as s:
                q = (
                    select(RecordRow.data)
                    .where(RecordRow.store == self.name)
                    .order_by(RecordRow.key)
                )
                return [self.model.model_validate(data) for (data,) in s.execute(q)]

    def _count(self, s: Session) -> int:
        q = select(func.count()).select_from(RecordRow).where(RecordRow.store == self.name)
        return s.execute(q).scalar_one()

    def __len__(self) -> int:
        with self._storage_errors("count records"):
            with self._new_session() as s:
                return self._count(s)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

"""
Generic entity service: validates payloads, stamps ids and timestamps, and
drives a :class:`RecordStore` through read-modify-write cycles.

Every public operation is an endpoint returning a ``Result``; failures are
raised internally as ``StoreError`` subclasses and converted by the decorator.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, List, Mapping, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..core.environment import Clock, IdGenerator, SystemClock, uuid4_generator
from ..core.record import Payload, Record
from ..core.result import InvalidPayloadError, NotFoundError
from ..events import EventRegistry, default_registry
from ..persistence.store import RecordStore
from .endpoints import mutation, query

LOGGER = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)


class EntityService(Generic[R]):
    """CRUD over one store of one record kind."""

    def __init__(
        self,
        store: RecordStore[R],
        *,
        clock: Clock | None = None,
        id_generator: IdGenerator | None = None,
        events: EventRegistry | None = None,
    ):
        self.store = store
        self.clock = clock if clock is not None else SystemClock()
        self.id_generator = id_generator if id_generator is not None else uuid4_generator
        self.events = events if events is not None else default_registry()

    @property
    def model(self) -> Type[R]:
        return self.store.model

    @property
    def lock(self):
        return self.store.lock

    # ---- helpers --------------------------------------------------------
    def _validate(self, payload: Payload | Mapping[str, Any]) -> Payload:
        payload_model = self.model.payload_model
        if isinstance(payload, payload_model):
            return payload
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(by_alias=True)
        try:
            return payload_model.model_validate(payload)
        except ValidationError as e:
            fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
            raise InvalidPayloadError(
                f"Missing required fields in payload: {', '.join(fields) or 'payload'}"
            ) from e

    def _require(self, record_id: str) -> R:
        record = None
        if isinstance(record_id, str):
            record = self.store.get(record_id)
        if record is None:
            raise NotFoundError(str(record_id), self.model.record_name)
        return record

    def _stamped(self, record: R, now: int) -> R:
        """Largest form later payload-free mutations can give ``record``."""
        return record.touched(now)

    def _check_headroom(self, record: R, now: int) -> None:
        """Reject writes that would leave no room for a later timestamp stamp."""
        self.store.check_bounds(record.id, self._stamped(record, now))

    def _save(self, event_type: str, record: R) -> R:
        self.store.put(record.id, record)
        LOGGER.info("%s %s id=%s", event_type, self.model.record_name, record.id)
        self.events.emit(event_type, record)
        return record

    # ---- queries --------------------------------------------------------
    @query
    def list_all(self) -> List[R]:
        records = self.store.values()
        LOGGER.debug("list %d %s records", len(records), self.model.record_name)
        return records

    @query
    def get_one(self, record_id: str) -> R:
        LOGGER.debug("get %s id=%s", self.model.record_name, record_id)
        return self._require(record_id)

    @query
    def get_field(self, record_id: str, field: str) -> Any:
        """Project a single attribute of a stored record."""
        if field not in self.model.model_fields:
            raise InvalidPayloadError(
                f"{self.model.__name__} has no field named {field!r}"
            )
        LOGGER.debug("get %s.%s id=%s", self.model.record_name, field, record_id)
        return getattr(self._require(record_id), field)

    # ---- mutations ------------------------------------------------------
    @mutation
    def add(self, payload: Payload | Mapping[str, Any]) -> R:
        valid = self._validate(payload)
        now = self.clock.now()
        record = self.model.create(self.id_generator(), now, valid)
        self._check_headroom(record, now)
        return self._save("create", record)

    @mutation
    def update(self, record_id: str, payload: Payload | Mapping[str, Any]) -> R:
        """Replace the payload fields; ``id`` and ``created_at`` are kept."""
        valid = self._validate(payload)
        record = self._require(record_id)
        now = self.clock.now()
        updated = record.touched(now, **valid.model_dump())
        self._check_headroom(updated, now)
        return self._save("update", updated)

    @mutation
    def delete(self, record_id: str) -> R:
        record = None
        if isinstance(record_id, str):
            record = self.store.remove(record_id)
        if record is None:
            raise NotFoundError(str(record_id), self.model.record_name)
        LOGGER.info("delete %s id=%s", self.model.record_name, record_id)
        self.events.emit("delete", record)
        return record

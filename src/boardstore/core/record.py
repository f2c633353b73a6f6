"""
Record / Payload kernel – *pure Pydantic* (no SQLAlchemy imports).

* Records are frozen; every mutation goes through :meth:`Record.touched`,
  which returns a new copy with ``updated_at`` stamped.
* Payloads are the caller-supplied part of a record; every field is a
  required, non-empty string.
* Wire names are camelCase (``tokenId``, ``createdAt``); Python code uses
  the snake_case attribute names.
"""

from __future__ import annotations

import re
from typing import Annotated, Any, ClassVar, Type, TypeVar

from pydantic import BaseModel, Field, StrictStr
from pydantic.alias_generators import to_camel

T_Record = TypeVar("T_Record", bound="Record")

# immutable after creation
IMMUTABLE_FIELDS = frozenset({"id", "created_at"})

RequiredStr = Annotated[StrictStr, Field(min_length=1)]


# helpers
def _snake(name: str) -> str:
    """CamelCase ➜ snake_case."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


class Payload(BaseModel):
    """Base class for write payloads – validated before the store is touched."""

    model_config = {
        "frozen": True,
        "extra": "ignore",
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class Record(BaseModel):
    """Base class – a stored entity keyed by its server-generated ``id``."""

    id: str
    created_at: int
    updated_at: int | None = None

    payload_model: ClassVar[Type[Payload]] = Payload
    record_name: ClassVar[str] = "record"

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    @classmethod
    def __pydantic_init_subclass__(cls, **kw: Any):
        super().__pydantic_init_subclass__(**kw)
        if "record_name" not in cls.__dict__:
            cls.record_name = _snake(cls.__name__).replace("_", " ")

    @classmethod
    def create(
        cls: Type[T_Record], record_id: str, now: int, payload: Payload
    ) -> T_Record:
        """Build version one of a record: ``created_at`` set, ``updated_at`` absent."""
        return cls(
            id=record_id,
            created_at=now,
            updated_at=None,
            **payload.model_dump(),
        )

    # copy‑on‑write mutation
    def touched(self: T_Record, now: int, **changes: Any) -> T_Record:
        """Return a copy with ``changes`` applied and ``updated_at = now``."""
        blocked = IMMUTABLE_FIELDS.intersection(changes)
        if blocked:
            raise ValueError(f"Fields {sorted(blocked)} are immutable")
        changes["updated_at"] = now
        return self.model_copy(update=changes)

    def dump(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys (the persisted form)."""
        return self.model_dump(mode="json", by_alias=True)


# ────────────────────────────────── listed tokens ──────────────────────────────────
class ListingPayload(Payload):
    token_id: RequiredStr
    token_name: RequiredStr
    body: RequiredStr
    pinata_url: RequiredStr = Field(alias="pinataURL")


class Listing(Record):
    """A listed NFT token on the board."""

    token_id: str
    token_name: str
    body: str
    pinata_url: str = Field(alias="pinataURL")
    currently_listed: bool = True

    payload_model: ClassVar[Type[Payload]] = ListingPayload
    record_name: ClassVar[str] = "listedToken"


# ────────────────────────────────── messages ───────────────────────────────────────
class MessagePayload(Payload):
    title: RequiredStr
    body: RequiredStr
    attachment_url: RequiredStr = Field(alias="attachmentURL")


class Message(Record):
    title: str
    body: str
    attachment_url: str = Field(alias="attachmentURL")

    payload_model: ClassVar[Type[Payload]] = MessagePayload

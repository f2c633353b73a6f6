"""
Error taxonomy and the explicit success/failure value every endpoint returns.

* Stores and services *raise* a :class:`StoreError` subclass.
* The endpoint decorators (``boardstore.services.endpoints``) turn the raised
  error into ``Result.err(...)`` so callers never see an uncaught fault.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class StoreError(Exception):
    """Base class – every failure a caller can recover from."""

    kind = "StoreError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind, "message": self.message}


class InvalidPayloadError(StoreError):
    """A required payload field is missing, empty or not a string."""

    kind = "InvalidPayload"


class BoundsExceededError(InvalidPayloadError):
    """Key or serialized record is larger than the store accepts."""


class NotFoundError(StoreError):
    kind = "NotFound"

    def __init__(self, record_id: str, record_name: str = "record"):
        super().__init__(f"A {record_name} with id={record_id} not found")
        self.record_id = record_id


class StorageFailureError(StoreError):
    """The backing database could not complete the operation."""

    kind = "StorageFailure"


class StoreConfigError(RuntimeError):
    """A store was reopened with bounds different from the persisted ones."""


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either ``ok`` with a value or ``err`` with a :class:`StoreError`.

    ``is_ok`` is decided by the error slot, never by the truthiness of the
    value, so ``Result.ok(False)`` is a success.
    """

    value: T | None = None
    error: StoreError | None = None

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def err(cls, error: StoreError) -> "Result[T]":
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    @property
    def is_err(self) -> bool:
        return self.error is not None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def to_dict(self) -> dict[str, Any]:
        if self.error is not None:
            return {"Err": self.error.to_dict()}
        return {"Ok": dump_value(self.value)}


def dump_value(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, list):
        return [dump_value(v) for v in value]
    return value

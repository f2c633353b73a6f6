"""
Public surface for boardstore.
Importing this module does **not** touch the database; call
`boardstore.init_boardstore(engine)` (or `Boardstore.init()`) during start-up.
"""

from .bootstrap import Services, init_boardstore
from .core.record import Listing, ListingPayload, Message, MessagePayload, Record
from .core.result import (
    InvalidPayloadError,
    NotFoundError,
    Result,
    StorageFailureError,
    StoreError,
)
from .events import on
from .persistence.store import RecordStore
from .runtime import Boardstore

__all__ = [
    "Boardstore",
    "InvalidPayloadError",
    "Listing",
    "ListingPayload",
    "Message",
    "MessagePayload",
    "NotFoundError",
    "Record",
    "RecordStore",
    "Result",
    "Services",
    "StorageFailureError",
    "StoreError",
    "init_boardstore",
    "on",
]

"""
Single entry-point that wires SQLAlchemy into boardstore.
Call once, e.g. in FastAPI startup; tests call it with an in-memory engine.
"""

from dataclasses import dataclass

from sqlalchemy.engine import Engine

from .config import Settings
from .core.environment import Clock, IdGenerator
from .core.record import Listing, Message
from .events import EventRegistry
from .persistence.models import Base
from .persistence.store import RecordStore
from .services.listings import STORE_NAME as LISTINGS_STORE, ListingService
from .services.messages import STORE_NAME as MESSAGES_STORE, MessageService


@dataclass
class Services:
    listings: ListingService
    messages: MessageService


def init_boardstore(
    engine: Engine,
    settings: Settings | None = None,
    *,
    clock: Clock | None = None,
    id_generator: IdGenerator | None = None,
    events: EventRegistry | None = None,
) -> Services:
    """
    Create the tables, open both stores and return their services.
    """
    settings = settings if settings is not None else Settings()
    Base.metadata.create_all(engine)  # ← this line creates tables

    bounds = {
        "max_key_size": settings.max_key_size,
        "max_value_size": settings.max_value_size,
        "capacity": settings.capacity,
    }
    deps = {"clock": clock, "id_generator": id_generator, "events": events}
    return Services(
        listings=ListingService(
            RecordStore(engine, LISTINGS_STORE, Listing, **bounds), **deps
        ),
        messages=MessageService(
            RecordStore(engine, MESSAGES_STORE, Message, **bounds), **deps
        ),
    )

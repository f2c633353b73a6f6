import itertools
import sqlite3
from contextlib import contextmanager

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.pool import StaticPool

from boardstore.bootstrap import Services, init_boardstore
from boardstore.core.record import Listing
from boardstore.events import EventRegistry
from boardstore.persistence.models import Base
from boardstore.persistence.store import RecordStore

###
# Setup and Aux functions

LISTING_PAYLOAD = {
    "tokenId": "T1",
    "tokenName": "Asset",
    "body": "desc",
    "pinataURL": "ipfs://x",
}

MESSAGE_PAYLOAD = {
    "title": "Hello",
    "body": "World",
    "attachmentURL": "ipfs://attachment",
}


class StepClock:
    """Deterministic clock: every call is one tick after the previous one."""

    def __init__(self, start: int = 1_000):
        self._ticks = itertools.count(start)
        self.calls = 0

    def now(self) -> int:
        self.calls += 1
        return next(self._ticks)


class SequentialIds:
    def __init__(self, prefix: str = "id"):
        self._counter = itertools.count(1)
        self.prefix = prefix

    def __call__(self) -> str:
        return f"{self.prefix}-{next(self._counter)}"


@contextmanager
def refuse_writes(engine):
    """Make every INSERT/UPDATE/DELETE on ``engine`` fail like a full disk."""

    def refuse(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith(("INSERT", "UPDATE", "DELETE")):
            raise sqlite3.OperationalError("database or disk is full")

    event.listen(engine, "before_cursor_execute", refuse)
    try:
        yield
    finally:
        event.remove(engine, "before_cursor_execute", refuse)


###
# Fixtures

@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def clock() -> StepClock:
    return StepClock()


@pytest.fixture()
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture()
def events() -> EventRegistry:
    return EventRegistry()


@pytest.fixture()
def services(engine, clock, ids, events) -> Services:
    return init_boardstore(engine, clock=clock, id_generator=ids, events=events)


@pytest.fixture()
def listings(services):
    return services.listings


@pytest.fixture()
def messages(services):
    return services.messages


@pytest.fixture()
def listing_store(engine) -> RecordStore[Listing]:
    return RecordStore(engine, "test_listings", Listing)

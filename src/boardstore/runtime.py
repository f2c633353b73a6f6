"""
boardstore.runtime  ──  A thin façade that owns the engine and the services.

Usage pattern in user code
--------------------------
    from boardstore.runtime import Boardstore

    app = Boardstore.create_app("boardstore", db_url="sqlite:///boardstore.db")

    # or, without HTTP:
    services = Boardstore.init(database_url="sqlite://").services
"""

from __future__ import annotations
from typing import Any, ClassVar, Optional

from fastapi import FastAPI
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from .api import create_router
from .bootstrap import Services, init_boardstore
from .config import Settings

MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def make_engine(database_url: str) -> Engine:
    """Engine for ``database_url``; an in-memory SQLite db is shared across threads."""
    if database_url in MEMORY_URLS:
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, pool_pre_ping=True)


class Boardstore:
    """
    Process-wide handle on one database. We keep a private singleton so
    callers don't have to pass stores around between modules; tests build
    their own services through ``init_boardstore`` instead.
    """

    _singleton: ClassVar[Optional["Boardstore"]] = None

    def __init__(self, engine: Engine, services: Services):
        self.engine = engine
        self.services = services

    # ---------- one-shot initialiser ----------
    @classmethod
    def init(
        cls,
        *,
        database_url: str | None = None,
        settings: Settings | None = None,
        **init_kwargs: Any,
    ) -> "Boardstore":
        if cls._singleton is None:
            settings = settings if settings is not None else Settings.from_env()
            if database_url is not None:
                settings = settings.model_copy(update={"database_url": database_url})
            engine = make_engine(settings.database_url)
            services = init_boardstore(engine, settings, **init_kwargs)
            cls._singleton = cls(engine, services)
        return cls._singleton

    # ---------- convenience helpers ----------
    @classmethod
    def instance(cls) -> "Boardstore":
        if cls._singleton is None:
            raise RuntimeError("Boardstore.init() has not been called")
        return cls._singleton

    @classmethod
    def reset(cls) -> None:
        if cls._singleton is not None:
            cls._singleton.engine.dispose()
        cls._singleton = None

    @classmethod
    def create_app(
        cls,
        name: str,
        *,
        db_url: str | None = None,
        settings: Settings | None = None,
        **fastapi_kwargs: Any,
    ) -> FastAPI:
        """
        One-liner for web apps:
            app = Boardstore.create_app("svc-name", db_url=URL)
        """
        app = FastAPI(title=name, **fastapi_kwargs)
        services = cls.init(database_url=db_url, settings=settings).services
        app.include_router(create_router(services.listings, services.messages))

        @app.get("/health")
        def health() -> dict[str, str]:
            return {"status": "running"}

        return app

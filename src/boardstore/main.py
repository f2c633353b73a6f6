#!/usr/bin/env python3
"""Minimal boardstore server: ``boardstore`` or ``python -m boardstore.main``."""

from __future__ import annotations

import logging

import uvicorn

from boardstore.config import Settings
from boardstore.runtime import Boardstore


def main() -> None:
    settings = Settings.from_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).info("Opening store at %s", settings.database_url)

    app = Boardstore.create_app("boardstore-server", settings=settings)

    # Run server
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()

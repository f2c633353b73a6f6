"""
Runtime settings read from the environment (a ``.env`` file is honoured).

    BOARDSTORE_DATABASE_URL     sqlite:///boardstore.db
    BOARDSTORE_MAX_KEY_SIZE     44
    BOARDSTORE_MAX_VALUE_SIZE   1024
    BOARDSTORE_CAPACITY         unset = unbounded
    BOARDSTORE_HOST / _PORT     0.0.0.0 / 8000
    BOARDSTORE_LOG_LEVEL        INFO
"""

from __future__ import annotations

import os
from typing import Mapping

from dotenv import load_dotenv
from pydantic import BaseModel, PositiveInt

from .persistence.store import MAX_KEY_SIZE, MAX_VALUE_SIZE

ENV_PREFIX = "BOARDSTORE_"


class Settings(BaseModel):
    database_url: str = "sqlite:///boardstore.db"
    max_key_size: PositiveInt = MAX_KEY_SIZE
    max_value_size: PositiveInt = MAX_VALUE_SIZE
    capacity: PositiveInt | None = None
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        if environ is None:
            load_dotenv()
            environ = os.environ
        values = {
            name: environ[ENV_PREFIX + name.upper()]
            for name in cls.model_fields
            if environ.get(ENV_PREFIX + name.upper())
        }
        return cls(**values)

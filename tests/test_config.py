import pytest
from pydantic import ValidationError

from boardstore.config import Settings
from boardstore.persistence.store import MAX_KEY_SIZE, MAX_VALUE_SIZE


def test_defaults():
    settings = Settings.from_env({})

    assert settings.database_url == "sqlite:///boardstore.db"
    assert settings.max_key_size == MAX_KEY_SIZE
    assert settings.max_value_size == MAX_VALUE_SIZE
    assert settings.capacity is None


def test_reads_prefixed_variables():
    settings = Settings.from_env(
        {
            "BOARDSTORE_DATABASE_URL": "sqlite://",
            "BOARDSTORE_MAX_VALUE_SIZE": "2048",
            "BOARDSTORE_CAPACITY": "10",
            "BOARDSTORE_PORT": "",
            "DATABASE_URL": "ignored",
        }
    )

    assert settings.database_url == "sqlite://"
    assert settings.max_value_size == 2048
    assert settings.capacity == 10
    assert settings.port == 8000


def test_rejects_non_positive_bounds():
    with pytest.raises(ValidationError):
        Settings.from_env({"BOARDSTORE_MAX_KEY_SIZE": "0"})

# tests/test_config.py
import pytest
from pydantic import ValidationError

from app.config import Settings
from tests.conftest import TEST_SECRET_KEY


def test_rejects_short_secret():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, secret_key="short", database_url="sqlite+aiosqlite://")
    with pytest.raises(ValidationError):
        Settings(_env_file=None, secret_key=TEST_SECRET_KEY[:31], database_url="sqlite+aiosqlite://")


def test_rejects_insecure_secret():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, secret_key="my-secret-key-that-is-long-enough-1234", database_url="sqlite+aiosqlite://")


def test_defaults():
    s = Settings(_env_file=None, secret_key=TEST_SECRET_KEY, database_url="sqlite+aiosqlite://")
    assert len(s.secret_key) >= 32
    assert s.token_header == "token"
    assert s.api_prefix == "/api"
    assert s.cors_origins_list == ["*"]
    assert s.rate_limit_enabled is True

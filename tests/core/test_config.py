import pytest
from pydantic import ValidationError

from securelayer.core.config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("ENCRYPTION_KEY", raising=False)
    s = Settings(_env_file=None)
    assert s.ENCRYPTION_KEY is None
    assert s.RATE_LIMIT_AI_MAX_REQUESTS == 30
    assert s.RATE_LIMIT_UPLOAD_MAX_REQUESTS == 10
    assert s.RATE_LIMIT_SWEEP_INTERVAL_SECONDS == 60.0
    assert s.is_development and not s.is_production


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("APP_ENV", "PRODUCTION")
    monkeypatch.setenv("RATE_LIMIT_AI_MAX_REQUESTS", "5")
    s = Settings(_env_file=None)
    assert s.is_production
    assert s.RATE_LIMIT_AI_MAX_REQUESTS == 5


def test_encryption_key_hidden_from_repr(monkeypatch):
    monkeypatch.setenv("ENCRYPTION_KEY", "x" * 40)
    assert "x" * 40 not in repr(Settings(_env_file=None))


@pytest.mark.parametrize(
    "name", ["RATE_LIMIT_UPLOAD_MAX_REQUESTS", "RATE_LIMIT_SWEEP_INTERVAL_SECONDS"]
)
def test_rate_limits_must_be_positive(monkeypatch, name):
    monkeypatch.setenv(name, "0")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)

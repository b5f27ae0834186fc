"""
Tests for environment-driven settings.
"""

import pytest
from pydantic import ValidationError

from communication_tracker.config import Settings, get_config_path


def test_blank_mongodb_url_is_rejected(monkeypatch):
    monkeypatch.setenv("MONGODB_URL", "   ")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_mongodb_url_is_required(monkeypatch):
    monkeypatch.delenv("MONGODB_URL", raising=False)
    monkeypatch.delenv("MONGO_URL", raising=False)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_mongo_url_alias_is_accepted(monkeypatch):
    monkeypatch.delenv("MONGODB_URL", raising=False)
    monkeypatch.setenv("MONGO_URL", "mongodb://db.internal:27017")

    assert Settings(_env_file=None).MONGODB_URL == "mongodb://db.internal:27017"


def test_defaults(monkeypatch):
    for name in ("HOST", "PORT", "MONGODB_DATABASE", "MONGODB_RETRY_DELAY_SECONDS", "CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)

    configured = Settings(_env_file=None)

    assert configured.HOST == "0.0.0.0"
    assert configured.PORT == 5000
    assert configured.MONGODB_DATABASE == "communication_tracker"
    assert configured.MONGODB_RETRY_DELAY_SECONDS == 5.0
    assert configured.cors_origins_list == ["*"]


@pytest.mark.parametrize("delay", ["0", "-1"])
def test_non_positive_retry_delay_is_rejected(monkeypatch, delay):
    monkeypatch.setenv("MONGODB_RETRY_DELAY_SECONDS", delay)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_cors_origins_list_drops_blank_entries(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:3000, ,https://crm.example.com")

    assert Settings(_env_file=None).cors_origins_list == ["http://localhost:3000", "https://crm.example.com"]


def test_config_path_env_var_wins(monkeypatch, tmp_path):
    env_file = tmp_path / "tracker.env"
    env_file.write_text("MONGODB_URL=mongodb://from-file:27017\n")
    monkeypatch.setenv("COMMUNICATION_TRACKER_CONFIG_PATH", str(env_file))

    assert get_config_path() == str(env_file)

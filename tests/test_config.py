"""Tests for configuration adapter."""

import pytest

from realtime_chat.adapters.config import AppConfig


def test_config_loads_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given no environment variables, when loading config, then defaults are used."""
    for name in ("HOST", "PORT", "RELOAD", "COOKIE_NAME", "IMAGE_STORE"):
        monkeypatch.delenv(name, raising=False)

    config = AppConfig(_env_file=None)

    assert config.host == "0.0.0.0"
    assert config.port == 5001
    assert config.reload is False
    assert config.cookie_name == "jwt"
    assert config.image_store == "inline"
    assert config.close_superseded_connections is True
    assert config.socket_requires_session is True


def test_config_loads_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given environment variables, when loading config, then they are used."""
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("JWT_SECRET", "from-env")
    monkeypatch.setenv("OUTBOUND_QUEUE_SIZE", "5")

    config = AppConfig(_env_file=None)

    assert config.host == "127.0.0.1"
    assert config.port == 9000
    assert config.jwt_secret == "from-env"
    assert config.outbound_queue_size == 5


def test_config_validates_image_store(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given an unknown image store, when loading config, then validation error is raised."""
    monkeypatch.setenv("IMAGE_STORE", "s3")

    with pytest.raises(ValueError, match="image_store must be either"):
        AppConfig(_env_file=None)


def test_config_requires_cloudinary_credentials() -> None:
    """Given the Cloudinary backend without credentials, then validation fails."""
    with pytest.raises(ValueError, match="CLOUDINARY_CLOUD_NAME"):
        AppConfig.for_testing(image_store="cloudinary")


def test_config_accepts_cloudinary_with_credentials() -> None:
    """Given Cloudinary credentials, then the backend is accepted."""
    config = AppConfig.for_testing(
        image_store="Cloudinary",
        cloudinary_cloud_name="demo",
        cloudinary_api_key="key",
        cloudinary_api_secret="secret",
    )

    assert config.image_store == "cloudinary"


def test_config_normalizes_log_level() -> None:
    """Given a lowercase log level, then it is upper-cased."""
    assert AppConfig.for_testing(log_level="debug").log_level == "DEBUG"


def test_config_rejects_unknown_log_level() -> None:
    """Given an unknown log level, then validation fails."""
    with pytest.raises(ValueError, match="log_level"):
        AppConfig.for_testing(log_level="chatty")


def test_config_rejects_empty_outbound_queue() -> None:
    """Given a zero outbound queue size, then validation fails."""
    with pytest.raises(ValueError, match="at least 1"):
        AppConfig.for_testing(outbound_queue_size=0)


def test_session_ttl_seconds_follows_days() -> None:
    """Given a session lifetime in days, then the seconds property matches."""
    assert AppConfig.for_testing(session_ttl_days=2).session_ttl_seconds == 2 * 24 * 60 * 60


def test_for_testing_uses_in_memory_database() -> None:
    """Given the testing factory, then the database is in memory and overrides apply."""
    config = AppConfig.for_testing(port=1234)

    assert config.database_path == ":memory:"
    assert config.development is True
    assert config.port == 1234

"""Unit tests for configuration."""

from config import Settings


def test_default_settings(monkeypatch):
    """Test that default settings are loaded correctly."""
    for name in ("DATABASE_URL", "VISION_API_KEY", "LEARNER_CONCURRENCY"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.app_name == "HalalScan"
    assert settings.debug is False
    assert settings.database_url == "sqlite:///./halalscan.db"
    assert settings.vision_api_key is None
    assert settings.gibberish_ratio_threshold == 0.4
    assert settings.segmenter_require_anchor is False
    assert settings.match_strategy == "substring"
    assert settings.learner_enabled is True


def test_custom_settings(monkeypatch):
    """Test that custom settings can be loaded from environment."""
    monkeypatch.setenv("APP_NAME", "TestApp")
    monkeypatch.setenv("DEBUG", "True")
    monkeypatch.setenv("API_PORT", "9000")
    monkeypatch.setenv("MATCH_STRATEGY", "edit_distance")
    monkeypatch.setenv("SEGMENTER_REQUIRE_ANCHOR", "true")

    settings = Settings(_env_file=None)

    assert settings.app_name == "TestApp"
    assert settings.debug is True
    assert settings.api_port == 9000
    assert settings.match_strategy == "edit_distance"
    assert settings.segmenter_require_anchor is True

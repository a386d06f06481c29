import logging

from league_analytics.config import Settings, configure_logging, get_settings


def test_defaults(settings):
    assert settings.log_level == "WARNING"
    assert settings.trade_evaluation_weeks == 4
    assert settings.pick_round_values[1] == 30.0
    assert settings.playoff_spots == 6


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("LEAGUE_ANALYTICS_PLAYOFF_SPOTS", "4")
    monkeypatch.setenv("LEAGUE_ANALYTICS_CLOSE_GAME_MARGIN", "7.5")
    settings = Settings(_env_file=None)
    assert settings.playoff_spots == 4
    assert settings.close_game_margin == 7.5


def test_get_settings_is_cached():
    get_settings.cache_clear()
    assert get_settings() is get_settings()


def test_configure_logging(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
    configure_logging(Settings(_env_file=None, log_level="debug"))
    assert calls["level"] == "DEBUG"

"""Tests for src/config — settings, engine config and logging."""

import logging

from src.config.engine import EngineConfig
from src.config.log import configure_logging
from src.config.settings import Settings
from src.engine.symbols import GENESYS, STARWARS


def make_settings(monkeypatch, **env) -> Settings:
    for key in ("SUPABASE_URL", "SUPABASE_ANON_KEY", "DICE_THEME", "IS_GAME_MASTER"):
        monkeypatch.delenv(key, raising=False)
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    return Settings(_env_file=None)


class TestSettings:
    def test_defaults(self, monkeypatch):
        settings = make_settings(monkeypatch)
        assert settings.dice_theme == "starwars"
        assert settings.is_game_master is False
        assert settings.has_supabase is False

    def test_env_overrides(self, monkeypatch):
        settings = make_settings(
            monkeypatch,
            DICE_THEME="genesys",
            IS_GAME_MASTER="true",
            SUPABASE_URL="https://example.supabase.co",
            SUPABASE_ANON_KEY="anon",
        )
        assert settings.dice_theme == "genesys"
        assert settings.is_game_master is True
        assert settings.has_supabase is True


class TestEngineConfig:
    def test_from_settings(self, monkeypatch):
        config = EngineConfig.from_settings(
            make_settings(monkeypatch, DICE_THEME="genesys", IS_GAME_MASTER="1")
        )
        assert config.table is GENESYS
        assert config.is_game_master is True
        assert config.proposal_topic == "destiny:flip"
        assert config.state_topic == "destiny:state"

    def test_unknown_theme_falls_back(self, monkeypatch):
        config = EngineConfig.from_settings(make_settings(monkeypatch, DICE_THEME="neon"))
        assert config.table is STARWARS


class TestConfigureLogging:
    def test_sets_root_level(self):
        root = logging.getLogger()
        previous = root.level
        try:
            configure_logging("warning")
            assert root.level == logging.WARNING
            configure_logging("INFO", debug=True)
            assert root.level == logging.DEBUG
        finally:
            root.setLevel(previous)

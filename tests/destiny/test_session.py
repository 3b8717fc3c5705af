"""Tests for src/destiny/session.py — wiring from settings."""

from unittest.mock import patch

from src.config.settings import Settings
from src.destiny.authority import Role
from src.destiny.session import open_destiny_pool
from src.realtime.channels import LocalBroadcast


class TestOpenDestinyPool:
    def test_local_when_no_supabase(self):
        pool = open_destiny_pool(Settings(_env_file=None, supabase_url=None, supabase_anon_key=None))
        assert isinstance(pool._channel, LocalBroadcast)
        assert pool.role is Role.OBSERVER

    def test_game_master_role(self):
        pool = open_destiny_pool(
            Settings(_env_file=None, supabase_url=None, supabase_anon_key=None, is_game_master=True)
        )
        assert pool.is_authority

    @patch("src.destiny.session.SupabaseBroadcast")
    @patch("src.destiny.session.WorldSettingsManager")
    @patch("src.destiny.session.create_supabase_client")
    def test_supabase_when_configured(self, mock_create, MockStore, MockBroadcast):
        MockStore.return_value.get.return_value = 1
        settings = Settings(
            _env_file=None,
            supabase_url="https://example.supabase.co",
            supabase_anon_key="anon",
        )

        pool = open_destiny_pool(settings)

        mock_create.assert_called_once_with(settings)
        MockBroadcast.assert_called_once_with(mock_create.return_value, "destiny")
        assert (pool.state.light, pool.state.dark) == (1, 1)

    @patch("src.destiny.session.configure_logging")
    def test_applies_logging_settings(self, mock_configure):
        open_destiny_pool(
            Settings(
                _env_file=None,
                supabase_url=None,
                supabase_anon_key=None,
                log_level="WARNING",
                debug=True,
            )
        )
        mock_configure.assert_called_once_with("WARNING", debug=True)

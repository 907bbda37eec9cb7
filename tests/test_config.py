"""Tests for environment-driven configuration."""

from scanner.config import DEFAULT_BUILDER_ADDRESS, AppSettings, SignalSettings


class TestDefaults:
    def test_signal_defaults(self) -> None:
        s = SignalSettings()
        assert s.top_n == 20
        assert s.max_score == 23.0
        assert s.high_volume_usd == 30_000_000.0

    def test_builder_address_default(self, monkeypatch) -> None:
        monkeypatch.delenv("BUILDER_ADDRESS", raising=False)
        assert AppSettings(_env_file=None).builder_address == DEFAULT_BUILDER_ADDRESS


class TestEnvironmentOverrides:
    def test_builder_address_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("BUILDER_ADDRESS", "0xFEED")
        assert AppSettings(_env_file=None).builder_address == "0xFEED"

    def test_signal_prefix(self, monkeypatch) -> None:
        monkeypatch.setenv("SIGNAL_TOP_N", "5")
        monkeypatch.setenv("SIGNAL_MOVE_PCT", "2.5")
        s = SignalSettings()
        assert s.top_n == 5
        assert s.move_pct == 2.5

    def test_mock_settings_fixture(self, mock_settings: AppSettings) -> None:
        assert mock_settings.builder_address == "0xTEST"
        assert mock_settings.hyperliquid.testnet is True
        assert mock_settings.dashboard.enabled is False

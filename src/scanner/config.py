"""Configuration system using pydantic-settings with environment variable loading."""

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BUILDER_ADDRESS = "0x78c04383dcE7376f5baE0282E8c759486d94AB55"


class HyperliquidSettings(BaseSettings):
    """Hyperliquid public info endpoint settings."""

    model_config = SettingsConfigDict(env_prefix="HYPERLIQUID_")

    testnet: bool = False
    timeout_ms: int = 10000
    cache_ttl: float = 30.0  # seconds a fetched snapshot stays valid


class SignalSettings(BaseSettings):
    """Composite score weights, caps and tag thresholds.

    Defaults reproduce the canonical scoring formula:
        turnover  = min(volume / max(oi, 1), 5) * 2        -> [0, 10]
        funding   = min(|funding_pct| / 0.1, 1) * 3         -> [0, 3]
        momentum  = min(|change_pct| * 0.4, 8)              -> [0, 8]
        oi        = min(oi / 500M, 1) * 2                   -> [0, 2]
    All fields configurable via SIGNAL_ environment variable prefix.
    """

    model_config = SettingsConfigDict(env_prefix="SIGNAL_")

    top_n: int = 20

    # Composite score
    turnover_cap: float = 5.0
    turnover_weight: float = 2.0
    funding_norm: float = 0.1  # percent per period mapping to full funding score
    funding_weight: float = 3.0
    momentum_factor: float = 0.4
    momentum_cap: float = 8.0
    oi_norm: float = 500_000_000.0  # USD notional mapping to full OI score
    oi_weight: float = 2.0

    # Tag thresholds
    move_pct: float = 3.0
    funding_pct: float = 0.05
    turnover_ratio: float = 2.0
    overheated_pct: float = 0.1
    high_volume_usd: float = 30_000_000.0

    @property
    def max_score(self) -> float:
        """Upper bound of the composite score under these weights."""
        return (
            self.turnover_cap * self.turnover_weight
            + self.funding_weight
            + self.momentum_cap
            + self.oi_weight
        )


class DashboardSettings(BaseSettings):
    """Dashboard server configuration."""

    model_config = SettingsConfigDict(env_prefix="DASHBOARD_")

    host: str = "0.0.0.0"
    port: int = 8080
    enabled: bool = True
    refresh_interval: int = 30  # seconds between signal refreshes


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    builder_address: str = DEFAULT_BUILDER_ADDRESS
    hyperliquid: HyperliquidSettings = HyperliquidSettings()
    signal: SignalSettings = SignalSettings()
    dashboard: DashboardSettings = DashboardSettings()

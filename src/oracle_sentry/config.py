"""Configuration system using pydantic-settings with environment variable loading."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class FeedSettings(BaseSettings):
    """Price feed sources for the tracked pair.

    Both feeds are read through ccxt. The fallback feed defaults to the same
    exchange as the primary; point it at a second venue for real redundancy.
    Feeds must share a fixed-point scale, so both are scaled by ``decimals``.
    """

    model_config = SettingsConfigDict(env_prefix="FEED_")

    exchange_id: str = "binance"
    primary_symbol: str = "ETH/USDT"
    fallback_exchange_id: str | None = None
    fallback_symbol: str = "ETH/USDC"
    pair: str = "ETH/USDT"  # identifier handed to the volume source
    decimals: int = 18
    volume_from_exchange: bool = False  # False keeps the zero-volume placeholder
    stale_after_seconds: float | None = None  # warn only, never reject


class DivergenceSettings(BaseSettings):
    """Dual-source divergence trigger parameters."""

    model_config = SettingsConfigDict(env_prefix="DIVERGENCE_")

    threshold_bps: int = 400  # 4%
    volume_threshold: int = 0
    required_match_count: int = 1


class SpikeSettings(BaseSettings):
    """Single-source rolling-average spike trigger parameters."""

    model_config = SettingsConfigDict(env_prefix="SPIKE_")

    threshold_bps: int = 2000  # 20%, must be > 0


class MonitorSettings(BaseSettings):
    """Polling loop configuration."""

    model_config = SettingsConfigDict(env_prefix="MONITOR_")

    variant: Literal["divergence", "spike"] = "divergence"
    poll_interval: float = 60.0  # seconds between ticks
    window_size: int = 10  # samples kept and evaluated per decision


class DashboardSettings(BaseSettings):
    """Status API server configuration."""

    model_config = SettingsConfigDict(env_prefix="DASHBOARD_")

    host: str = "0.0.0.0"
    port: int = 8080
    enabled: bool = False


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    feed: FeedSettings = FeedSettings()
    divergence: DivergenceSettings = DivergenceSettings()
    spike: SpikeSettings = SpikeSettings()
    monitor: MonitorSettings = MonitorSettings()
    dashboard: DashboardSettings = DashboardSettings()

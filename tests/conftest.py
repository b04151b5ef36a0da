"""Shared test fixtures for oracle-sentry."""

import pytest

from oracle_sentry.config import (
    AppSettings,
    DivergenceSettings,
    FeedSettings,
    MonitorSettings,
    SpikeSettings,
)


@pytest.fixture
def mock_settings() -> AppSettings:
    """Return AppSettings with test defaults (two venues, 5-sample window)."""
    return AppSettings(
        log_level="DEBUG",
        feed=FeedSettings(
            exchange_id="binance",
            primary_symbol="ETH/USDT",
            fallback_exchange_id="kraken",
            fallback_symbol="ETH/USD",
            pair="ETH/USDT",
        ),
        divergence=DivergenceSettings(
            threshold_bps=400, volume_threshold=10, required_match_count=1
        ),
        spike=SpikeSettings(threshold_bps=2000),
        monitor=MonitorSettings(variant="divergence", poll_interval=1.0, window_size=5),
    )

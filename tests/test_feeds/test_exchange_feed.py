"""Tests for exchange-backed feed and volume sources.

All tests use a mocked exchange client to avoid real API calls.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from oracle_sentry.exceptions import FeedUnavailableError
from oracle_sentry.feeds.base import ZeroVolumeSource
from oracle_sentry.feeds.exchange_feed import ExchangeFeedSource, ExchangeVolumeSource


def _make_exchange(ticker: dict) -> MagicMock:
    exchange = MagicMock()
    exchange.exchange_id = "binance"
    exchange.fetch_ticker = AsyncMock(return_value=ticker)
    return exchange


class TestExchangeFeedSource:
    """Tests for ExchangeFeedSource."""

    @pytest.mark.asyncio
    async def test_reads_last_price_scaled(self) -> None:
        exchange = _make_exchange({"last": 2500.25, "timestamp": 1_700_000_000_000})
        feed = ExchangeFeedSource(exchange, "ETH/USDT")

        reading = await feed.read_latest()

        assert reading.raw_value == 250_025 * 10**16
        assert reading.updated_at == 1_700_000_000.0
        exchange.fetch_ticker.assert_awaited_once_with("ETH/USDT")

    @pytest.mark.asyncio
    async def test_custom_decimals(self) -> None:
        exchange = _make_exchange({"last": "1.5", "timestamp": 1_700_000_000_000})
        feed = ExchangeFeedSource(exchange, "USDC/USDT", decimals=6)
        reading = await feed.read_latest()
        assert reading.raw_value == 1_500_000

    @pytest.mark.asyncio
    async def test_falls_back_to_close(self) -> None:
        exchange = _make_exchange({"last": None, "close": 3.0, "timestamp": None})
        feed = ExchangeFeedSource(exchange, "ETH/USDT", decimals=0)
        reading = await feed.read_latest()
        assert reading.raw_value == 3

    @pytest.mark.asyncio
    async def test_missing_price_raises(self) -> None:
        exchange = _make_exchange({"last": None, "close": None})
        feed = ExchangeFeedSource(exchange, "ETH/USDT")
        with pytest.raises(FeedUnavailableError):
            await feed.read_latest()

    @pytest.mark.asyncio
    async def test_exchange_errors_propagate(self) -> None:
        exchange = _make_exchange({})
        exchange.fetch_ticker = AsyncMock(side_effect=ConnectionError("down"))
        feed = ExchangeFeedSource(exchange, "ETH/USDT")
        with pytest.raises(ConnectionError):
            await feed.read_latest()

    def test_name_includes_venue_and_symbol(self) -> None:
        feed = ExchangeFeedSource(_make_exchange({}), "ETH/USDT")
        assert feed.name == "binance:ETH/USDT"


class TestVolumeSources:
    """Tests for the zero placeholder and the exchange volume source."""

    @pytest.mark.asyncio
    async def test_zero_volume_source(self) -> None:
        assert await ZeroVolumeSource().read_volume("ETH/USDT") == 0

    @pytest.mark.asyncio
    async def test_exchange_volume_truncated_to_int(self) -> None:
        exchange = _make_exchange({"quoteVolume": 1234567.89})
        volume = await ExchangeVolumeSource(exchange).read_volume("ETH/USDT")
        assert volume == 1_234_567
        exchange.fetch_ticker.assert_awaited_once_with("ETH/USDT")

    @pytest.mark.asyncio
    async def test_exchange_volume_missing_is_zero(self) -> None:
        exchange = _make_exchange({"quoteVolume": None})
        assert await ExchangeVolumeSource(exchange).read_volume("ETH/USDT") == 0

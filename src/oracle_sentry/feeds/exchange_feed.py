"""Exchange-backed feed and volume sources.

Reads ccxt unified tickers and converts them to fixed-point integer
readings so two venues can be compared on one scale.
"""

from oracle_sentry.exceptions import FeedUnavailableError
from oracle_sentry.exchange.client import ExchangeClient
from oracle_sentry.feeds.base import FeedSource, VolumeSource
from oracle_sentry.feeds.normalizer import to_fixed_point
from oracle_sentry.logging import get_logger
from oracle_sentry.models import FeedReading

logger = get_logger(__name__)


class ExchangeFeedSource(FeedSource):
    """Price feed reading the last traded price of one exchange symbol.

    Args:
        exchange: Connected exchange client.
        symbol: Unified ccxt symbol, e.g. "ETH/USDT".
        decimals: Fixed-point scale applied to the ticker price.
    """

    def __init__(self, exchange: ExchangeClient, symbol: str, decimals: int = 18) -> None:
        self._exchange = exchange
        self._symbol = symbol
        self._decimals = decimals
        self.name = f"{exchange.exchange_id}:{symbol}"

    async def read_latest(self) -> FeedReading:
        ticker = await self._exchange.fetch_ticker(self._symbol)

        last = ticker.get("last")
        if last is None:
            last = ticker.get("close")
        if last is None:
            raise FeedUnavailableError(f"no price in ticker for {self.name}")

        timestamp_ms = ticker.get("timestamp")
        raw_value = to_fixed_point(last, self._decimals)

        logger.debug("feed_read", feed=self.name, raw_value=str(raw_value))
        if timestamp_ms is None:
            return FeedReading(raw_value=raw_value)
        return FeedReading(raw_value=raw_value, updated_at=timestamp_ms / 1000)


class ExchangeVolumeSource(VolumeSource):
    """Volume source reporting 24h quote volume from an exchange ticker.

    The ``pair`` argument is used as the ccxt symbol. Volume is truncated to
    whole quote units; a missing or negative volume reads as 0.
    """

    def __init__(self, exchange: ExchangeClient) -> None:
        self._exchange = exchange

    async def read_volume(self, pair: str) -> int:
        ticker = await self._exchange.fetch_ticker(pair)
        volume = ticker.get("quoteVolume")
        if volume is None:
            return 0
        return max(to_fixed_point(volume, decimals=0), 0)

"""Generic exchange client implementation via ccxt async.

Wraps any ``ccxt.async_support`` exchange class with market loading and
async cleanup. Only public market-data endpoints are used.
"""

import ccxt.async_support as ccxt_async

from oracle_sentry.exchange.client import ExchangeClient
from oracle_sentry.logging import get_logger

logger = get_logger(__name__)


class CcxtClient(ExchangeClient):
    """Concrete exchange client backed by a ccxt async exchange instance."""

    def __init__(self, exchange_id: str, options: dict | None = None) -> None:
        exchange_class = getattr(ccxt_async, exchange_id, None)
        if exchange_class is None:
            raise ValueError(f"unknown ccxt exchange id: {exchange_id!r}")

        config: dict = {"enableRateLimit": True}
        if options:
            config["options"] = options

        self._exchange_id = exchange_id
        self._exchange = exchange_class(config)
        self._markets: dict = {}

    @property
    def exchange_id(self) -> str:
        return self._exchange_id

    @property
    def exchange(self) -> ccxt_async.Exchange:
        """Access the underlying ccxt exchange instance."""
        return self._exchange

    async def connect(self) -> None:
        """Initialize connection by loading markets."""
        logger.info("connecting_to_exchange", exchange=self._exchange_id)
        self._markets = await self._exchange.load_markets()
        logger.info(
            "exchange_connected",
            exchange=self._exchange_id,
            market_count=len(self._markets),
        )

    async def close(self) -> None:
        """Clean up ccxt async resources. CRITICAL: must be called to avoid resource leaks."""
        await self._exchange.close()
        logger.info("exchange_connection_closed", exchange=self._exchange_id)

    async def fetch_ticker(self, symbol: str) -> dict:
        """Fetch current ticker data for a single symbol."""
        return await self._exchange.fetch_ticker(symbol)

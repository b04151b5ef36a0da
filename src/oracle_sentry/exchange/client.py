"""Abstract exchange client interface.

Feed sources depend only on this interface, keeping ccxt details
isolated in the concrete implementation.
"""

from abc import ABC, abstractmethod


class ExchangeClient(ABC):
    """Abstract base class for exchange API clients."""

    @property
    @abstractmethod
    def exchange_id(self) -> str:
        """Identifier of the venue behind this client (e.g. "binance")."""
        ...

    @abstractmethod
    async def connect(self) -> None:
        """Initialize connection and load markets."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Clean up resources (CRITICAL for ccxt async)."""
        ...

    @abstractmethod
    async def fetch_ticker(self, symbol: str) -> dict:
        """Fetch current ticker data for a single symbol.

        Returns a ccxt unified ticker dict with at least ``last``,
        ``timestamp`` (Unix milliseconds) and ``quoteVolume`` keys.
        """
        ...

"""Exchange client layer -- price and volume access via ccxt."""

from oracle_sentry.exchange.ccxt_client import CcxtClient
from oracle_sentry.exchange.client import ExchangeClient

__all__ = ["CcxtClient", "ExchangeClient"]

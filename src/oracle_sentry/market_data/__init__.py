"""Sample collection and the bounded history window."""

from oracle_sentry.market_data.collector import SampleCollector, SpikeCollector
from oracle_sentry.market_data.history import HistoryWindow

__all__ = ["HistoryWindow", "SampleCollector", "SpikeCollector"]

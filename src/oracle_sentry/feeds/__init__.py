"""Feed access: source interfaces, exchange-backed sources and reading normalization."""

from oracle_sentry.feeds.base import FeedSource, VolumeSource, ZeroVolumeSource
from oracle_sentry.feeds.exchange_feed import ExchangeFeedSource, ExchangeVolumeSource
from oracle_sentry.feeds.normalizer import normalize_reading, to_fixed_point

__all__ = [
    "ExchangeFeedSource",
    "ExchangeVolumeSource",
    "FeedSource",
    "VolumeSource",
    "ZeroVolumeSource",
    "normalize_reading",
    "to_fixed_point",
]

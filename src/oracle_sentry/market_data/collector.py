"""Sample collectors -- one feed read per tick, normalized into samples.

Collectors are read-only against their sources and keep no state. Feed
errors propagate to the caller unchanged.
"""

import time
from collections.abc import Callable

from oracle_sentry.feeds.base import FeedSource, VolumeSource, ZeroVolumeSource
from oracle_sentry.feeds.normalizer import normalize_reading
from oracle_sentry.logging import get_logger
from oracle_sentry.models import FeedReading, Sample

logger = get_logger(__name__)


def _warn_if_stale(
    source: FeedSource, reading: FeedReading, now: float, stale_after: float | None
) -> None:
    if stale_after is None:
        return
    age = reading.age(now)
    if age > stale_after:
        logger.warning(
            "stale_feed_reading",
            feed=source.name,
            age_seconds=round(age, 3),
            stale_after_seconds=stale_after,
        )


class SampleCollector:
    """Collects divergence samples from a primary and a fallback feed.

    Args:
        primary: Primary price feed.
        fallback: Independent fallback price feed on the same scale.
        pair: Tracked pair identifier handed to the volume source.
        volume_source: Volume metric provider. Defaults to ZeroVolumeSource.
        stale_after_seconds: Log a warning for readings older than this.
            None disables the check. Stale readings are never dropped.
        clock: Time source returning Unix seconds.
    """

    def __init__(
        self,
        primary: FeedSource,
        fallback: FeedSource,
        pair: str,
        volume_source: VolumeSource | None = None,
        stale_after_seconds: float | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._primary = primary
        self._fallback = fallback
        self._pair = pair
        self._volume_source = volume_source or ZeroVolumeSource()
        self._stale_after = stale_after_seconds
        self._clock = clock

    @property
    def pair(self) -> str:
        return self._pair

    async def collect(self) -> Sample:
        """Read both feeds and the volume metric into one Sample."""
        primary = await self._primary.read_latest()
        fallback = await self._fallback.read_latest()
        volume = await self._volume_source.read_volume(self._pair)

        now = self._clock()
        _warn_if_stale(self._primary, primary, now, self._stale_after)
        _warn_if_stale(self._fallback, fallback, now, self._stale_after)

        if primary.raw_value < 0 or fallback.raw_value < 0:
            logger.warning(
                "negative_reading_clamped",
                primary_raw=str(primary.raw_value),
                fallback_raw=str(fallback.raw_value),
            )

        return Sample(
            primary_price=normalize_reading(primary.raw_value),
            fallback_price=normalize_reading(fallback.raw_value),
            volume_metric=max(volume, 0),
            captured_at=int(now),
        )


class SpikeCollector:
    """Collects one normalized price per tick from a single feed."""

    def __init__(
        self,
        source: FeedSource,
        stale_after_seconds: float | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._source = source
        self._stale_after = stale_after_seconds
        self._clock = clock

    async def collect(self) -> int:
        """Read the feed and return its clamped price."""
        reading = await self._source.read_latest()
        _warn_if_stale(self._source, reading, self._clock(), self._stale_after)
        return normalize_reading(reading.raw_value)

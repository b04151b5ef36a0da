"""Feed and volume source interfaces consumed by the sample collectors.

Retry and backoff for unavailable feeds belong to the implementations of
these interfaces, not to the collectors.
"""

from abc import ABC, abstractmethod

from oracle_sentry.models import FeedReading


class FeedSource(ABC):
    """A price feed returning its latest signed reading."""

    #: Human-readable name used in log events.
    name: str = "feed"

    @abstractmethod
    async def read_latest(self) -> FeedReading:
        """Return the latest reading. May raise; callers do not retry."""
        ...


class VolumeSource(ABC):
    """Auxiliary volume metric for the divergence volume gate."""

    @abstractmethod
    async def read_volume(self, pair: str) -> int:
        """Return an unsigned volume metric for ``pair``."""
        ...


class ZeroVolumeSource(VolumeSource):
    """Placeholder volume source that always reports 0.

    With this source any ``volume_threshold`` above 0 keeps the divergence
    trigger from firing. Swap in a real source to enable the volume gate.
    """

    async def read_volume(self, pair: str) -> int:
        return 0

"""Shared data models for oracle-sentry.

CRITICAL: Prices are fixed-point integers (default scale 1e18). Never use
float for prices; the trigger arithmetic relies on integer floor division.
"""

import time
from dataclasses import dataclass, field


@dataclass(frozen=True)
class FeedReading:
    """A single value read from a price feed at collection time.

    ``raw_value`` is signed and may be negative on a misbehaving feed.
    ``updated_at`` is kept for staleness checks; no policy rejects on it.
    """

    raw_value: int
    updated_at: float = field(default_factory=time.time)

    def age(self, now: float | None = None) -> float:
        """Return seconds elapsed since the feed last updated."""
        return (time.time() if now is None else now) - self.updated_at


@dataclass(frozen=True)
class Sample:
    """Normalized, immutable record of one divergence collection step.

    A feed that reported a negative value is stored with price 0. Such
    samples stay in the history and are skipped at evaluation time.
    """

    primary_price: int
    fallback_price: int
    volume_metric: int = 0
    captured_at: int = 0  # Unix seconds

    def __post_init__(self) -> None:
        for name in ("primary_price", "fallback_price", "volume_metric", "captured_at"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")

    @property
    def has_zero_price(self) -> bool:
        """True if either feed produced no usable price for this sample."""
        return self.primary_price == 0 or self.fallback_price == 0

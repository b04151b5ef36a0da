"""Single-source rolling-average spike detection.

Compares the latest price against the floor average of every earlier price
in the window. Fires when the deviation reaches ``threshold_bps``.

CRITICAL: Integer arithmetic only; averages use floor division.
"""

from collections.abc import Sequence

from oracle_sentry.logging import get_logger
from oracle_sentry.signals.models import SpikeConfig

logger = get_logger(__name__)

BPS_DENOMINATOR = 10_000

#: A baseline of two prices plus the latest one.
MIN_SPIKE_SAMPLES = 3


def compute_spike_bps(prices: Sequence[int]) -> int | None:
    """Deviation of the latest price from the baseline average, in bps of the average.

    Args:
        prices: Unsigned prices ordered oldest first.

    Returns:
        Deviation in bps, or None when there are fewer than three prices or
        the average or latest price is 0.
    """
    if len(prices) < MIN_SPIKE_SAMPLES:
        return None

    baseline = prices[:-1]
    avg = sum(baseline) // len(baseline)
    latest = prices[-1]
    if avg == 0 or latest == 0:
        return None

    return abs(avg - latest) * BPS_DENOMINATOR // avg


def is_spike(prices: Sequence[int], threshold_bps: int) -> bool:
    """True if the latest price deviates from the baseline by at least ``threshold_bps``."""
    spike_bps = compute_spike_bps(prices)
    if spike_bps is None:
        return False
    return spike_bps >= threshold_bps


class SpikeEvaluator:
    """Stateless spike evaluator bound to a positive threshold."""

    def __init__(self, config: SpikeConfig) -> None:
        self._config = config

    @property
    def config(self) -> SpikeConfig:
        return self._config

    def evaluate(self, prices: Sequence[int]) -> bool:
        """Evaluate an oldest-first price sequence. Returns only the boolean."""
        fired = is_spike(prices, self._config.threshold_bps)
        logger.debug("spike_evaluated", window=len(prices), fired=fired)
        return fired

"""Dual-source divergence detection with volume gate and repeat count.

A sample triggers when its primary and fallback prices diverge by at least
``divergence_threshold_bps`` relative to the lower price AND its volume
metric meets ``volume_threshold``. The window fires when at least
``required_match_count`` samples trigger.

CRITICAL: Integer arithmetic only. Prices are unsigned, so ``//`` is the
truncating division the thresholds are defined against.
"""

from collections.abc import Sequence

from oracle_sentry.logging import get_logger
from oracle_sentry.models import Sample
from oracle_sentry.signals.codec import decode_sample, encode_context
from oracle_sentry.signals.models import (
    NO_DECISION,
    Decision,
    DivergenceConfig,
    DivergenceContext,
)

logger = get_logger(__name__)

BPS_DENOMINATOR = 10_000


def compute_divergence_bps(primary_price: int, fallback_price: int) -> int | None:
    """Relative divergence of two prices in basis points of the lower one.

    Formula: |primary - fallback| * 10000 // min(primary, fallback)

    Returns:
        Divergence in bps, or None if either price is 0 (no data).
    """
    if primary_price == 0 or fallback_price == 0:
        return None
    diff = abs(primary_price - fallback_price)
    min_price = min(primary_price, fallback_price)
    return diff * BPS_DENOMINATOR // min_price


def sample_triggers(sample: Sample, config: DivergenceConfig) -> bool:
    """Whether a single sample meets both the divergence and volume bars."""
    divergence_bps = compute_divergence_bps(sample.primary_price, sample.fallback_price)
    if divergence_bps is None:
        return False
    divergence_ok = divergence_bps >= config.divergence_threshold_bps
    volume_ok = sample.volume_metric >= config.volume_threshold
    return divergence_ok and volume_ok


def count_triggers(samples: Sequence[Sample], config: DivergenceConfig) -> int:
    """Number of samples in the window that trigger. Zero-price samples never count."""
    return sum(1 for sample in samples if sample_triggers(sample, config))


def evaluate_divergence(samples: Sequence[Sample], config: DivergenceConfig) -> Decision:
    """Evaluate a newest-first window of samples.

    The context payload reports the newest sample's raw values together with
    the window-wide trigger count, whichever samples produced that count.

    Args:
        samples: Samples ordered most recent first.
        config: Trigger parameters.

    Returns:
        Decision with a DivergenceContext when fired, NO_DECISION otherwise.
        An empty window never fires.
    """
    if not samples:
        return NO_DECISION

    trigger_count = count_triggers(samples, config)
    if trigger_count < config.required_match_count:
        return NO_DECISION

    newest = samples[0]
    return Decision(
        fired=True,
        context=DivergenceContext(
            primary_price=newest.primary_price,
            fallback_price=newest.fallback_price,
            volume_metric=newest.volume_metric,
            trigger_count=trigger_count,
        ),
    )


class DivergenceEvaluator:
    """Stateless divergence evaluator bound to a fixed configuration.

    Safe to call concurrently; it holds nothing but the frozen config.
    """

    def __init__(self, config: DivergenceConfig) -> None:
        self._config = config

    @property
    def config(self) -> DivergenceConfig:
        return self._config

    def evaluate(self, samples: Sequence[Sample]) -> Decision:
        """Evaluate typed samples ordered newest first."""
        decision = evaluate_divergence(samples, self._config)
        logger.debug(
            "divergence_evaluated",
            window=len(samples),
            fired=decision.fired,
            trigger_count=decision.context.trigger_count if decision.context else 0,
        )
        return decision

    def should_respond(self, encoded_samples: Sequence[bytes]) -> tuple[bool, bytes]:
        """Evaluate encoded samples and return an encoded context payload.

        Raises:
            CodecError: If any sample encoding is malformed.
        """
        samples = [decode_sample(data) for data in encoded_samples]
        decision = self.evaluate(samples)
        return decision.fired, encode_context(decision.context)

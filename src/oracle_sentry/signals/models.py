"""Trigger configuration and decision models for the window evaluators.

All values are integers. Thresholds are in basis points (10000 = 100%).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from oracle_sentry.exceptions import InvalidThresholdError

if TYPE_CHECKING:
    from oracle_sentry.config import DivergenceSettings, SpikeSettings


@dataclass(frozen=True)
class DivergenceConfig:
    """Immutable divergence trigger parameters.

    Values are accepted unchecked. ``required_match_count=0`` makes every
    non-empty window fire.
    """

    divergence_threshold_bps: int
    volume_threshold: int = 0
    required_match_count: int = 1

    @classmethod
    def from_settings(cls, settings: DivergenceSettings) -> DivergenceConfig:
        return cls(
            divergence_threshold_bps=settings.threshold_bps,
            volume_threshold=settings.volume_threshold,
            required_match_count=settings.required_match_count,
        )


@dataclass(frozen=True)
class SpikeConfig:
    """Immutable spike trigger parameters. ``threshold_bps`` must be positive."""

    threshold_bps: int

    def __post_init__(self) -> None:
        if self.threshold_bps <= 0:
            raise InvalidThresholdError(
                f"spike threshold must be > 0 bps, got {self.threshold_bps}"
            )

    @classmethod
    def from_settings(cls, settings: SpikeSettings) -> SpikeConfig:
        return cls(threshold_bps=settings.threshold_bps)


@dataclass(frozen=True)
class DivergenceContext:
    """Payload attached to a fired divergence decision.

    Prices and volume come from the newest sample in the window only;
    ``trigger_count`` is aggregated over the whole window.
    """

    primary_price: int
    fallback_price: int
    volume_metric: int
    trigger_count: int


@dataclass(frozen=True)
class Decision:
    """Outcome of one evaluation. ``context`` is None when nothing fired."""

    fired: bool
    context: DivergenceContext | None = None


#: Sentinel returned for every non-firing divergence evaluation.
NO_DECISION = Decision(fired=False, context=None)

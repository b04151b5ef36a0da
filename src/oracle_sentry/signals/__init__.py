"""Window evaluators for divergence and spike detection.

Provides the trigger configuration and decision models, the two fixed
detection policies, and the wire codec used when samples cross a process
boundary.
"""

from oracle_sentry.signals.codec import (
    EMPTY_PAYLOAD,
    decode_context,
    decode_sample,
    encode_context,
    encode_sample,
)
from oracle_sentry.signals.divergence import (
    DivergenceEvaluator,
    compute_divergence_bps,
    count_triggers,
    evaluate_divergence,
    sample_triggers,
)
from oracle_sentry.signals.models import (
    NO_DECISION,
    Decision,
    DivergenceConfig,
    DivergenceContext,
    SpikeConfig,
)
from oracle_sentry.signals.spike import SpikeEvaluator, compute_spike_bps, is_spike

__all__ = [
    "EMPTY_PAYLOAD",
    "NO_DECISION",
    "Decision",
    "DivergenceConfig",
    "DivergenceContext",
    "DivergenceEvaluator",
    "SpikeConfig",
    "SpikeEvaluator",
    "compute_divergence_bps",
    "compute_spike_bps",
    "count_triggers",
    "decode_context",
    "decode_sample",
    "encode_context",
    "encode_sample",
    "evaluate_divergence",
    "is_spike",
    "sample_triggers",
]

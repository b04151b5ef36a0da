"""Wire codec for samples and divergence context payloads.

Each field is one 32-byte big-endian unsigned word, so a sample or a
context encodes to exactly 128 bytes. A non-firing decision encodes to
the empty byte string.
"""

from __future__ import annotations

from oracle_sentry.exceptions import CodecError
from oracle_sentry.models import Sample
from oracle_sentry.signals.models import DivergenceContext

WORD_SIZE = 32
_FIELDS = 4
RECORD_SIZE = WORD_SIZE * _FIELDS

EMPTY_PAYLOAD = b""


def _encode_words(*values: int) -> bytes:
    try:
        return b"".join(v.to_bytes(WORD_SIZE, "big", signed=False) for v in values)
    except OverflowError as e:
        raise CodecError(f"value does not fit in a {WORD_SIZE}-byte word") from e


def _decode_words(data: bytes, what: str) -> list[int]:
    if len(data) != RECORD_SIZE:
        raise CodecError(f"{what} encoding must be {RECORD_SIZE} bytes, got {len(data)}")
    return [
        int.from_bytes(data[i : i + WORD_SIZE], "big", signed=False)
        for i in range(0, RECORD_SIZE, WORD_SIZE)
    ]


def encode_sample(sample: Sample) -> bytes:
    return _encode_words(
        sample.primary_price,
        sample.fallback_price,
        sample.volume_metric,
        sample.captured_at,
    )


def decode_sample(data: bytes) -> Sample:
    primary, fallback, volume, captured_at = _decode_words(data, "sample")
    return Sample(
        primary_price=primary,
        fallback_price=fallback,
        volume_metric=volume,
        captured_at=captured_at,
    )


def encode_context(context: DivergenceContext | None) -> bytes:
    """Encode a fired decision's context; None encodes to EMPTY_PAYLOAD."""
    if context is None:
        return EMPTY_PAYLOAD
    return _encode_words(
        context.primary_price,
        context.fallback_price,
        context.volume_metric,
        context.trigger_count,
    )


def decode_context(data: bytes) -> DivergenceContext | None:
    if data == EMPTY_PAYLOAD:
        return None
    primary, fallback, volume, trigger_count = _decode_words(data, "context")
    return DivergenceContext(
        primary_price=primary,
        fallback_price=fallback,
        volume_metric=volume,
        trigger_count=trigger_count,
    )

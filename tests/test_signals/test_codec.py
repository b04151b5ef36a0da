"""Tests for the sample and context wire codec."""

import pytest

from oracle_sentry.exceptions import CodecError
from oracle_sentry.models import Sample
from oracle_sentry.signals.codec import (
    EMPTY_PAYLOAD,
    RECORD_SIZE,
    WORD_SIZE,
    decode_context,
    decode_sample,
    encode_context,
    encode_sample,
)
from oracle_sentry.signals.models import DivergenceContext


class TestSampleCodec:
    """Tests for encode_sample / decode_sample."""

    def test_layout_is_four_big_endian_words(self) -> None:
        data = encode_sample(
            Sample(primary_price=1, fallback_price=2, volume_metric=3, captured_at=4)
        )
        assert len(data) == RECORD_SIZE == 4 * WORD_SIZE
        assert data[WORD_SIZE - 1] == 1
        assert data[2 * WORD_SIZE - 1] == 2
        assert data[3 * WORD_SIZE - 1] == 3
        assert data[4 * WORD_SIZE - 1] == 4
        assert data[: WORD_SIZE - 1] == bytes(WORD_SIZE - 1)

    def test_decode_restores_fixed_point_prices(self) -> None:
        sample = Sample(
            primary_price=105 * 10**16,
            fallback_price=10**18,
            volume_metric=50,
            captured_at=1_700_000_000,
        )
        assert decode_sample(encode_sample(sample)) == sample

    @pytest.mark.parametrize("size", [0, 96, 129])
    def test_wrong_length_rejected(self, size: int) -> None:
        with pytest.raises(CodecError):
            decode_sample(bytes(size))

    def test_oversized_value_rejected(self) -> None:
        with pytest.raises(CodecError):
            encode_sample(Sample(primary_price=2**256, fallback_price=1))


class TestContextCodec:
    """Tests for encode_context / decode_context."""

    def test_none_encodes_to_empty_payload(self) -> None:
        assert encode_context(None) == EMPTY_PAYLOAD
        assert decode_context(EMPTY_PAYLOAD) is None

    def test_context_encodes_trigger_count_last(self) -> None:
        ctx = DivergenceContext(
            primary_price=105 * 10**16,
            fallback_price=10**18,
            volume_metric=50,
            trigger_count=3,
        )
        data = encode_context(ctx)
        assert len(data) == RECORD_SIZE
        assert int.from_bytes(data[-WORD_SIZE:], "big") == 3
        assert decode_context(data) == ctx

    def test_truncated_context_rejected(self) -> None:
        with pytest.raises(CodecError):
            decode_context(b"\x00" * 64)

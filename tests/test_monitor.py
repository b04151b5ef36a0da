"""Tests for the divergence and spike polling monitors.

Collectors and responders are mocked; evaluators and windows are real.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from oracle_sentry.market_data.history import HistoryWindow
from oracle_sentry.models import Sample
from oracle_sentry.monitor import DivergenceMonitor, SpikeMonitor
from oracle_sentry.response import LogResponseHandler
from oracle_sentry.signals.divergence import DivergenceEvaluator
from oracle_sentry.signals.models import (
    NO_DECISION,
    Decision,
    DivergenceConfig,
    DivergenceContext,
    SpikeConfig,
)
from oracle_sentry.signals.spike import SpikeEvaluator

DIVERGED = Sample(primary_price=105 * 10**16, fallback_price=10**18, volume_metric=50, captured_at=1)
ALIGNED = Sample(primary_price=10**18, fallback_price=10**18, volume_metric=50, captured_at=2)


def _make_collector(*samples: Sample) -> MagicMock:
    collector = MagicMock()
    collector.pair = "ETH/USDT"
    collector.collect = AsyncMock(side_effect=list(samples))
    return collector


def _make_responder() -> MagicMock:
    responder = MagicMock()
    responder.respond = AsyncMock()
    return responder


def _divergence_monitor(
    collector: MagicMock,
    responder: MagicMock,
    required_match_count: int = 2,
    window_size: int = 3,
) -> DivergenceMonitor:
    return DivergenceMonitor(
        collector=collector,
        evaluator=DivergenceEvaluator(
            DivergenceConfig(
                divergence_threshold_bps=400,
                volume_threshold=10,
                required_match_count=required_match_count,
            )
        ),
        window=HistoryWindow(window_size),
        responder=responder,
        poll_interval=0.01,
    )


class TestDivergenceMonitorTick:
    """Tests for one collect-append-evaluate-respond cycle."""

    @pytest.mark.asyncio
    async def test_requires_repeat_before_firing(self) -> None:
        responder = _make_responder()
        monitor = _divergence_monitor(_make_collector(DIVERGED, DIVERGED), responder)

        first = await monitor.tick()
        assert first == NO_DECISION
        responder.respond.assert_not_awaited()

        second = await monitor.tick()
        assert second.fired is True
        assert second.context is not None
        assert second.context.trigger_count == 2
        responder.respond.assert_awaited_once_with("divergence", second)

    @pytest.mark.asyncio
    async def test_window_newest_first_and_bounded(self) -> None:
        samples = [
            Sample(primary_price=10**18, fallback_price=10**18, captured_at=i)
            for i in range(5)
        ]
        monitor = _divergence_monitor(_make_collector(*samples), _make_responder())
        for _ in samples:
            await monitor.tick()
        assert [s.captured_at for s in monitor.window.newest_first()] == [4, 3, 2]

    @pytest.mark.asyncio
    async def test_context_from_newest_sample(self) -> None:
        responder = _make_responder()
        monitor = _divergence_monitor(
            _make_collector(DIVERGED, DIVERGED, ALIGNED), responder
        )
        await monitor.tick()
        await monitor.tick()
        decision = await monitor.tick()
        assert decision == Decision(
            fired=True,
            context=DivergenceContext(
                primary_price=10**18,
                fallback_price=10**18,
                volume_metric=50,
                trigger_count=2,
            ),
        )

    @pytest.mark.asyncio
    async def test_tick_updates_status_fields(self) -> None:
        monitor = _divergence_monitor(_make_collector(ALIGNED), _make_responder())
        assert monitor.last_tick_at is None
        await monitor.tick()
        assert monitor.tick_count == 1
        assert monitor.last_tick_at is not None
        assert monitor.last_decision == NO_DECISION

    @pytest.mark.asyncio
    async def test_tick_propagates_feed_errors(self) -> None:
        collector = MagicMock()
        collector.collect = AsyncMock(side_effect=ConnectionError("feed down"))
        monitor = _divergence_monitor(collector, _make_responder())
        with pytest.raises(ConnectionError):
            await monitor.tick()
        assert len(monitor.window) == 0

    @pytest.mark.asyncio
    async def test_default_responder_is_logging(self) -> None:
        monitor = DivergenceMonitor(
            collector=_make_collector(DIVERGED),
            evaluator=DivergenceEvaluator(DivergenceConfig(divergence_threshold_bps=400)),
            window=HistoryWindow(3),
        )
        assert isinstance(monitor._responder, LogResponseHandler)
        decision = await monitor.tick()
        assert decision.fired is True


class TestSpikeMonitorTick:
    """Tests for the spike monitor cycle."""

    @pytest.mark.asyncio
    async def test_fires_on_spike_without_context(self) -> None:
        collector = MagicMock()
        collector.collect = AsyncMock(side_effect=[100, 100, 100, 130])
        responder = _make_responder()
        monitor = SpikeMonitor(
            collector=collector,
            evaluator=SpikeEvaluator(SpikeConfig(threshold_bps=2000)),
            window=HistoryWindow(4),
            responder=responder,
        )

        decisions = [await monitor.tick() for _ in range(4)]

        assert [d.fired for d in decisions] == [False, False, False, True]
        assert decisions[-1].context is None
        responder.respond.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_window_evaluated_oldest_first(self) -> None:
        """Latest price is the one compared against the baseline."""
        collector = MagicMock()
        collector.collect = AsyncMock(side_effect=[130, 100, 100, 100])
        monitor = SpikeMonitor(
            collector=collector,
            evaluator=SpikeEvaluator(SpikeConfig(threshold_bps=2000)),
            window=HistoryWindow(4),
            responder=_make_responder(),
        )
        decisions = [await monitor.tick() for _ in range(4)]
        # baseline avg (130+100+100)//3 = 110, latest 100 -> 909 bps
        assert decisions[-1].fired is False


class TestMonitorLifecycle:
    """Tests for start/stop of the background loop."""

    @pytest.mark.asyncio
    async def test_start_and_stop(self) -> None:
        collector = MagicMock()
        collector.pair = "ETH/USDT"
        collector.collect = AsyncMock(return_value=ALIGNED)
        monitor = _divergence_monitor(collector, _make_responder())

        await monitor.start()
        assert monitor.is_running is True
        await asyncio.sleep(0.05)
        await monitor.stop()

        assert monitor.is_running is False
        assert monitor.tick_count >= 1

    @pytest.mark.asyncio
    async def test_loop_survives_tick_errors(self) -> None:
        collector = MagicMock()
        collector.pair = "ETH/USDT"
        calls = {"n": 0}

        async def _collect() -> Sample:
            calls["n"] += 1
            if calls["n"] == 1:
                raise ConnectionError("down")
            return ALIGNED

        collector.collect = AsyncMock(side_effect=_collect)
        monitor = _divergence_monitor(collector, _make_responder())

        await monitor.start()
        await asyncio.sleep(0.05)
        await monitor.stop()

        assert collector.collect.await_count >= 2
        assert monitor.tick_count >= 1

    @pytest.mark.asyncio
    async def test_double_start_ignored(self) -> None:
        collector = MagicMock()
        collector.pair = "ETH/USDT"
        collector.collect = AsyncMock(return_value=ALIGNED)
        monitor = _divergence_monitor(collector, _make_responder())

        await monitor.start()
        first_task = monitor._task
        await monitor.start()
        assert monitor._task is first_task
        await monitor.stop()

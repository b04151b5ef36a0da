"""Polling monitors -- run the collect, append, evaluate, respond cycle.

Each monitor owns its history window and mutates it only from its own
background task, so a tick always completes before the next one touches
the window. Calling ``tick()`` directly (tests, external schedulers)
bypasses the loop's error handling and propagates feed errors.
"""

import asyncio
import time
from abc import ABC, abstractmethod

import structlog

from oracle_sentry.logging import get_logger
from oracle_sentry.market_data.collector import SampleCollector, SpikeCollector
from oracle_sentry.market_data.history import HistoryWindow
from oracle_sentry.models import Sample
from oracle_sentry.response import LogResponseHandler, ResponseHandler
from oracle_sentry.signals.divergence import DivergenceEvaluator
from oracle_sentry.signals.models import NO_DECISION, Decision
from oracle_sentry.signals.spike import SpikeEvaluator

logger = get_logger(__name__)


class BaseMonitor(ABC):
    """Background polling loop shared by both detection variants."""

    variant: str = ""

    def __init__(
        self,
        window: HistoryWindow,
        responder: ResponseHandler | None = None,
        poll_interval: float = 60.0,
    ) -> None:
        self.window = window
        self._responder = responder or LogResponseHandler()
        self._poll_interval = poll_interval
        self._running = False
        self._task: asyncio.Task | None = None  # type: ignore[type-arg]
        self.last_decision: Decision = NO_DECISION
        self.last_tick_at: float | None = None
        self.tick_count = 0

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Begin polling in the background."""
        if self._running:
            logger.warning("monitor_already_running", variant=self.variant)
            return
        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        logger.info(
            "monitor_started", variant=self.variant, poll_interval=self._poll_interval
        )

    async def stop(self) -> None:
        """Stop the polling loop gracefully."""
        self._running = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("monitor_stopped", variant=self.variant, ticks=self.tick_count)

    async def _run_loop(self) -> None:
        while self._running:
            try:
                await self.tick()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.warning("monitor_tick_error", variant=self.variant, exc_info=True)
            if self._running:
                await asyncio.sleep(self._poll_interval)

    async def tick(self) -> Decision:
        """Run one full cycle and return its decision."""
        with structlog.contextvars.bound_contextvars(variant=self.variant):
            decision = await self._collect_and_evaluate()
            self.last_decision = decision
            self.last_tick_at = time.time()
            self.tick_count += 1
            if decision.fired:
                await self._responder.respond(self.variant, decision)
        return decision

    @abstractmethod
    async def _collect_and_evaluate(self) -> Decision:
        ...



class DivergenceMonitor(BaseMonitor):
    """Runs the dual-source divergence trigger on every tick."""

    variant = "divergence"

    def __init__(
        self,
        collector: SampleCollector,
        evaluator: DivergenceEvaluator,
        window: HistoryWindow[Sample],
        responder: ResponseHandler | None = None,
        poll_interval: float = 60.0,
    ) -> None:
        super().__init__(window, responder=responder, poll_interval=poll_interval)
        self._collector = collector
        self._evaluator = evaluator

    async def _collect_and_evaluate(self) -> Decision:
        sample = await self._collector.collect()
        self.window.append(sample)
        decision = self._evaluator.evaluate(self.window.newest_first())
        logger.info(
            "divergence_tick",
            pair=self._collector.pair,
            primary_price=str(sample.primary_price),
            fallback_price=str(sample.fallback_price),
            volume_metric=str(sample.volume_metric),
            window=len(self.window),
            fired=decision.fired,
        )
        return decision


class SpikeMonitor(BaseMonitor):
    """Runs the rolling-average spike trigger on every tick.

    A fired spike decision carries no context payload.
    """

    variant = "spike"

    def __init__(
        self,
        collector: SpikeCollector,
        evaluator: SpikeEvaluator,
        window: HistoryWindow[int],
        responder: ResponseHandler | None = None,
        poll_interval: float = 60.0,
    ) -> None:
        super().__init__(window, responder=responder, poll_interval=poll_interval)
        self._collector = collector
        self._evaluator = evaluator

    async def _collect_and_evaluate(self) -> Decision:
        price = await self._collector.collect()
        self.window.append(price)
        fired = self._evaluator.evaluate(self.window.oldest_first())
        logger.info("spike_tick", price=str(price), window=len(self.window), fired=fired)
        return Decision(fired=fired) if fired else NO_DECISION

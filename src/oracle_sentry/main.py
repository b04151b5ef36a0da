"""Entry point for oracle-sentry.

Wires feeds, collector, evaluator and monitor together, optionally embeds
the FastAPI status API, and runs the polling loop. When the status API is
enabled, the monitor and uvicorn share one asyncio event loop through
FastAPI's lifespan context manager.

Handles SIGINT/SIGTERM for graceful shutdown.

Component wiring order (in _build_components):
1. Exchange clients (primary, and fallback if it is a different venue)
2. Feed sources and optional exchange volume source
3. Collector for the configured variant
4. Evaluator with its frozen trigger configuration
5. History window sized by MONITOR_WINDOW_SIZE
6. Monitor with the logging response handler
"""

import asyncio
import signal
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI

from oracle_sentry.config import AppSettings
from oracle_sentry.exchange.ccxt_client import CcxtClient
from oracle_sentry.exchange.client import ExchangeClient
from oracle_sentry.feeds.base import VolumeSource
from oracle_sentry.feeds.exchange_feed import ExchangeFeedSource, ExchangeVolumeSource
from oracle_sentry.logging import get_logger, setup_logging
from oracle_sentry.market_data.collector import SampleCollector, SpikeCollector
from oracle_sentry.market_data.history import HistoryWindow
from oracle_sentry.monitor import BaseMonitor, DivergenceMonitor, SpikeMonitor
from oracle_sentry.response import LogResponseHandler
from oracle_sentry.signals.divergence import DivergenceEvaluator
from oracle_sentry.signals.models import DivergenceConfig, SpikeConfig
from oracle_sentry.signals.spike import SpikeEvaluator


def _build_components(settings: AppSettings) -> dict[str, Any]:
    """Build all components from settings.

    Does NOT connect exchange clients -- that happens in the lifespan
    (status API mode) or run().

    Raises:
        InvalidThresholdError: If the spike variant is configured with a
            non-positive threshold.
    """
    feed = settings.feed
    primary_client = CcxtClient(feed.exchange_id)
    clients: list[ExchangeClient] = [primary_client]

    if feed.fallback_exchange_id and feed.fallback_exchange_id != feed.exchange_id:
        fallback_client = CcxtClient(feed.fallback_exchange_id)
        clients.append(fallback_client)
    else:
        fallback_client = primary_client

    primary = ExchangeFeedSource(primary_client, feed.primary_symbol, feed.decimals)
    responder = LogResponseHandler()

    monitor: BaseMonitor
    if settings.monitor.variant == "spike":
        monitor = SpikeMonitor(
            collector=SpikeCollector(primary, stale_after_seconds=feed.stale_after_seconds),
            evaluator=SpikeEvaluator(SpikeConfig.from_settings(settings.spike)),
            window=HistoryWindow(settings.monitor.window_size),
            responder=responder,
            poll_interval=settings.monitor.poll_interval,
        )
    else:
        fallback = ExchangeFeedSource(fallback_client, feed.fallback_symbol, feed.decimals)
        volume_source: VolumeSource | None = None
        if feed.volume_from_exchange:
            volume_source = ExchangeVolumeSource(primary_client)

        monitor = DivergenceMonitor(
            collector=SampleCollector(
                primary=primary,
                fallback=fallback,
                pair=feed.pair,
                volume_source=volume_source,
                stale_after_seconds=feed.stale_after_seconds,
            ),
            evaluator=DivergenceEvaluator(DivergenceConfig.from_settings(settings.divergence)),
            window=HistoryWindow(settings.monitor.window_size),
            responder=responder,
            poll_interval=settings.monitor.poll_interval,
        )

    return {"exchange_clients": clients, "monitor": monitor}


def _setup_signal_handlers(stop_event: asyncio.Event) -> None:
    """Register SIGINT/SIGTERM to request a graceful stop.

    Must be called after the asyncio event loop is running.
    """
    logger = get_logger("oracle_sentry.main")
    loop = asyncio.get_running_loop()

    def _graceful_handler() -> None:
        logger.info("graceful_shutdown_signal")
        stop_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, _graceful_handler)


async def _connect_all(clients: list[ExchangeClient]) -> None:
    for client in clients:
        await client.connect()


async def _close_all(clients: list[ExchangeClient]) -> None:
    for client in clients:
        await client.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect exchanges and start the monitor for the lifetime of the API server."""
    logger = get_logger("oracle_sentry.main")
    components = app.state.components
    monitor: BaseMonitor = components["monitor"]
    app.state.monitor = monitor

    await _connect_all(components["exchange_clients"])
    await monitor.start()
    logger.info("lifespan_started", variant=monitor.variant)

    yield

    await monitor.stop()
    await _close_all(components["exchange_clients"])
    logger.info("oracle_sentry_stopped")


async def run() -> None:
    """Run oracle-sentry until a shutdown signal arrives."""
    settings = AppSettings()

    setup_logging(settings.log_level)
    logger = get_logger("oracle_sentry.main")

    components = _build_components(settings)

    if settings.dashboard.enabled:
        from oracle_sentry.dashboard.app import create_dashboard_app

        app = create_dashboard_app(lifespan=lifespan)
        app.state.components = components

        logger.info(
            "starting_with_dashboard",
            host=settings.dashboard.host,
            port=settings.dashboard.port,
            variant=settings.monitor.variant,
        )

        config = uvicorn.Config(
            app,
            host=settings.dashboard.host,
            port=settings.dashboard.port,
            log_level="warning",
        )
        server = uvicorn.Server(config)
        await server.serve()
        return

    stop_event = asyncio.Event()
    _setup_signal_handlers(stop_event)
    monitor: BaseMonitor = components["monitor"]

    logger.info(
        "starting_without_dashboard",
        variant=settings.monitor.variant,
        window_size=settings.monitor.window_size,
        poll_interval=settings.monitor.poll_interval,
    )

    try:
        await _connect_all(components["exchange_clients"])
        await monitor.start()
        await stop_event.wait()
    finally:
        await monitor.stop()
        await _close_all(components["exchange_clients"])
        logger.info("oracle_sentry_stopped")


def main() -> None:
    """Synchronous entry point."""
    asyncio.run(run())


if __name__ == "__main__":
    main()

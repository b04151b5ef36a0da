"""Response handlers invoked when a trigger fires.

Delivering or executing the response is outside this package. The default
handler only records the event in the structured log.
"""

from abc import ABC, abstractmethod

from oracle_sentry.logging import get_logger
from oracle_sentry.signals.models import Decision

logger = get_logger(__name__)


class ResponseHandler(ABC):
    """Receives every fired decision from a monitor."""

    @abstractmethod
    async def respond(self, variant: str, decision: Decision) -> None:
        """Act on a fired decision."""
        ...


class LogResponseHandler(ResponseHandler):
    """Logs fired decisions at WARNING level with their context payload."""

    async def respond(self, variant: str, decision: Decision) -> None:
        ctx = decision.context
        if ctx is None:
            logger.warning("response_triggered", variant=variant)
            return
        logger.warning(
            "response_triggered",
            variant=variant,
            primary_price=str(ctx.primary_price),
            fallback_price=str(ctx.fallback_price),
            volume_metric=str(ctx.volume_metric),
            trigger_count=ctx.trigger_count,
        )

"""JSON API endpoints exposing monitor state.

Fixed-point integers are rendered as strings; 1e18-scaled prices exceed
the range JSON clients can represent exactly.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from oracle_sentry.models import Sample
from oracle_sentry.monitor import BaseMonitor
from oracle_sentry.signals.models import Decision

router = APIRouter()


def _get_monitor(request: Request) -> BaseMonitor:
    monitor = request.app.state.monitor
    if monitor is None:
        raise HTTPException(status_code=503, detail="monitor not initialised")
    return monitor


def _decision_to_dict(decision: Decision) -> dict[str, Any]:
    ctx = decision.context
    return {
        "fired": decision.fired,
        "context": None
        if ctx is None
        else {
            "primary_price": str(ctx.primary_price),
            "fallback_price": str(ctx.fallback_price),
            "volume_metric": str(ctx.volume_metric),
            "trigger_count": ctx.trigger_count,
        },
    }


def _entry_to_dict(entry: Sample | int) -> dict[str, Any]:
    if isinstance(entry, Sample):
        return {
            "primary_price": str(entry.primary_price),
            "fallback_price": str(entry.fallback_price),
            "volume_metric": str(entry.volume_metric),
            "captured_at": entry.captured_at,
        }
    return {"price": str(entry)}


@router.get("/status")
async def get_status(request: Request) -> JSONResponse:
    """Monitor variant, loop state, window fill and the last decision."""
    monitor = _get_monitor(request)
    return JSONResponse(
        content={
            "variant": monitor.variant,
            "running": monitor.is_running,
            "tick_count": monitor.tick_count,
            "last_tick_at": monitor.last_tick_at,
            "window_size": len(monitor.window),
            "window_capacity": monitor.window.capacity,
            "last_decision": _decision_to_dict(monitor.last_decision),
        }
    )


@router.get("/window")
async def get_window(request: Request) -> JSONResponse:
    """Current history window, newest entry first."""
    monitor = _get_monitor(request)
    return JSONResponse(
        content=[_entry_to_dict(entry) for entry in monitor.window.newest_first()]
    )

"""Background scheduler for opportunity expiry.

Runs as an asyncio task during the application lifespan. Every
``expiry_sweep_interval_minutes`` it deactivates each active opportunity
whose expiry date has passed.
"""

import asyncio
from datetime import datetime

from callboard.concepts.opportunities import OpportunityConcept
from callboard.config import get_settings
from callboard.database import get_db_session
from callboard.logging_config import get_logger

logger = get_logger(__name__)


async def run_expiry_sweep(now: datetime | None = None) -> int:
    """Single cycle: deactivate everything that has expired. Returns the count."""
    async with get_db_session() as session:
        opportunities = OpportunityConcept(
            session, lifetime_days=get_settings().opportunity_lifetime_days
        )
        expired = await opportunities.expire_due(now)
        await session.commit()

    if expired:
        logger.info("expiry_sweep_complete", opportunities_expired=len(expired))
    return len(expired)


async def scheduler_loop(stop_event: asyncio.Event, interval_minutes: int | None = None):
    """Main scheduler loop. Runs until stop_event is set."""
    if interval_minutes is None:
        interval_minutes = get_settings().expiry_sweep_interval_minutes
    interval = interval_minutes * 60
    logger.info("scheduler_started", interval_minutes=interval_minutes)

    while not stop_event.is_set():
        try:
            await run_expiry_sweep()
        except Exception:
            logger.exception("scheduler_cycle_error")

        # Wait for the interval or until stopped
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=interval)
            break
        except asyncio.TimeoutError:
            pass

    logger.info("scheduler_stopped")


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------

_scheduler_task: asyncio.Task | None = None
_stop_event: asyncio.Event | None = None


async def start_scheduler(interval_minutes: int | None = None) -> None:
    """Start the expiry sweep as a background task."""
    global _scheduler_task, _stop_event
    _stop_event = asyncio.Event()
    _scheduler_task = asyncio.create_task(scheduler_loop(_stop_event, interval_minutes))


async def stop_scheduler() -> None:
    """Stop the expiry sweep gracefully."""
    global _scheduler_task, _stop_event
    if _stop_event is not None:
        _stop_event.set()
    if _scheduler_task is not None:
        _scheduler_task.cancel()
        try:
            await _scheduler_task
        except asyncio.CancelledError:
            pass
    _scheduler_task = None
    _stop_event = None

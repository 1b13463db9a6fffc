"""Ticking clock that re-renders the dial on a fixed interval."""

import logging
from collections.abc import Callable
from datetime import datetime

from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .config import Config

logger = logging.getLogger(__name__)


def tick(on_tick: Callable[[datetime], None], now: Callable[[], datetime] = datetime.now) -> None:
    """Pass the current time to on_tick, logging instead of raising."""
    current = now()
    try:
        on_tick(current)
    except Exception as e:
        # A failed render must not stop the clock.
        logger.error(f"Tick at {current:%H:%M} failed: {e}")


def setup_clock(
    config: Config,
    on_tick: Callable[[datetime], None],
    now: Callable[[], datetime] = datetime.now,
) -> BlockingScheduler:
    """Schedule on_tick every REFRESH_SECONDS, first run immediately."""
    scheduler = BlockingScheduler()
    scheduler.add_job(
        tick,
        IntervalTrigger(seconds=config.refresh_seconds),
        args=[on_tick, now],
        id="dial_refresh",
        next_run_time=now(),
        coalesce=True,
        max_instances=1,
    )
    logger.info(f"Scheduled dial refresh every {config.refresh_seconds}s")
    return scheduler


def run_clock(config: Config, on_tick: Callable[[datetime], None]) -> None:
    """Run the clock until interrupted."""
    scheduler = setup_clock(config, on_tick)
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        logger.info("Clock stopped")

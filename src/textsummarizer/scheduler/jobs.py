"""Background job scheduler for the text summarizer."""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from textsummarizer.services.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


class SchedulerService:
    """Manages background housekeeping jobs."""

    def __init__(self, rate_limiter: RateLimiter) -> None:
        """Initialize the scheduler service."""
        self.scheduler = AsyncIOScheduler()
        self.rate_limiter = rate_limiter

    async def _run_rate_limit_sweep(self) -> None:
        """Drop rate limit buckets whose window has fully elapsed."""
        try:
            removed = self.rate_limiter.sweep()
            if removed:
                logger.info(f"Rate limit sweep removed {removed} idle address(es)")
        except Exception as e:
            logger.error(f"Rate limit sweep failed: {e}", exc_info=True)

    def start(self) -> None:
        """Start the scheduler with configured jobs."""
        window = self.rate_limiter.window_seconds
        self.scheduler.add_job(
            self._run_rate_limit_sweep,
            trigger=IntervalTrigger(seconds=window),
            id="rate_limit_sweep",
            name="Rate Limit Bucket Sweep",
            replace_existing=True,
        )
        logger.info(f"Scheduled rate limit sweep (every {window}s)")

        self.scheduler.start()
        logger.info("Scheduler started")

    def shutdown(self) -> None:
        """Shutdown the scheduler gracefully."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Scheduler shut down")

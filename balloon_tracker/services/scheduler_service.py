"""Daily scheduler for the tracker job."""
import logging
import time
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class DailyScheduler:
    """Runs a job once a day at a fixed UTC time."""

    def __init__(
        self,
        hour: int,
        minute: int,
        job: Callable[[], object],
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the scheduler.

        Args:
            hour: UTC hour (0-23)
            minute: UTC minute (0-59)
            job: Callable run at each occurrence
            clock: Returns the current aware UTC time
            sleep: Blocks for the given number of seconds
        """
        self.hour = hour
        self.minute = minute
        self.job = job
        self.clock = clock
        self.sleep = sleep

    def next_run_after(self, now: datetime) -> datetime:
        """Next occurrence of the scheduled time strictly after `now`."""
        candidate = now.replace(hour=self.hour, minute=self.minute, second=0, microsecond=0)
        if candidate <= now:
            candidate += timedelta(days=1)
        return candidate

    def run_forever(self, max_runs: Optional[int] = None) -> None:
        """
        Sleep until each occurrence and run the job.

        Args:
            max_runs: Stop after this many runs (None runs until interrupted)
        """
        runs = 0
        while max_runs is None or runs < max_runs:
            now = self.clock()
            next_run = self.next_run_after(now)
            logger.info(f"Next run scheduled at {next_run.isoformat()}")
            self.sleep((next_run - now).total_seconds())
            try:
                self.job()
            except Exception:
                logger.exception("Scheduled run failed, waiting for the next occurrence")
            runs += 1

from __future__ import annotations

import logging
from datetime import time, tzinfo
from typing import Optional

from ..core.constants import AUTO_CLOSE_INTERVAL_SECONDS, BACKFILL_RUN_AT
from .auto_close import AutoCloseJob
from .backfill import MissingDayBackfill
from .ticker import Ticker, daily_at, every

logger = logging.getLogger(__name__)


class JobScheduler:
    """Owns the tickers of the two batch jobs.

    Auto-close is checked hourly and once at startup (a restart after the
    cutoff still closes the day). Backfill runs daily at midnight for the
    previous date, and once at startup to catch a missed midnight.
    """

    def __init__(
        self,
        auto_close: AutoCloseJob,
        backfill: MissingDayBackfill,
        *,
        tz: Optional[tzinfo] = None,
        auto_close_interval: float = AUTO_CLOSE_INTERVAL_SECONDS,
        backfill_at: time = BACKFILL_RUN_AT,
    ):
        self.auto_close_ticker = Ticker("auto-close", auto_close.run_once, every(auto_close_interval))
        self.backfill_ticker = Ticker("missing-days", backfill.run_for_previous_day, daily_at(backfill_at, tz))

    def start(self) -> None:
        logger.info("Job scheduler starting (auto-close hourly, missing days at midnight)")
        self.auto_close_ticker.start()
        self.backfill_ticker.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self.auto_close_ticker.stop(timeout)
        self.backfill_ticker.stop(timeout)

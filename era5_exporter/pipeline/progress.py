from __future__ import annotations

import datetime as dt
import logging
import queue
import threading
import time
from typing import Optional

logger = logging.getLogger(__name__)


class ProgressAggregator(threading.Thread):
    """
    Collect per-batch record counts from the workers and log progress.

    Workers call ``report``; the aggregator thread sums the counts and logs
    the inserted percentage of ``total`` with the elapsed time after every
    batch. ``close`` lets the thread drain what is queued and exit.
    """

    def __init__(self, total: int, *, start_time: Optional[float] = None) -> None:
        super().__init__(name="progress", daemon=True)
        self.total = total
        self.inserted = 0
        self.batches = 0
        self._counts: "queue.Queue[Optional[int]]" = queue.Queue()
        self._start_time = start_time

    def report(self, count: int) -> None:
        self._counts.put(count)

    def close(self) -> None:
        self._counts.put(None)

    def percent(self) -> float:
        if self.total <= 0:
            return 100.0
        return 100 * self.inserted / self.total

    def elapsed(self) -> dt.timedelta:
        start = self._start_time if self._start_time is not None else time.monotonic()
        return dt.timedelta(seconds=round(time.monotonic() - start))

    def run(self) -> None:
        if self._start_time is None:
            self._start_time = time.monotonic()
        while True:
            count = self._counts.get()
            if count is None:
                return
            self.inserted += count
            self.batches += 1
            logger.info(f"inserted rows={self.percent():.2f}% in={self.elapsed()}")

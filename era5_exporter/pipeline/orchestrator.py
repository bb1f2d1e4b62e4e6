"""Extract-batch-load pipeline from a grid scanner into an insert client."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterator, List, Optional, Protocol, Sequence, TypeVar

from ..core.constants import DEFAULT_RECS_PER_INSERT
from ..sources.record import Record
from ..sources.scanner import ScanError
from .handoff import Handoff
from .progress import ProgressAggregator

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RecordScanner(Protocol):
    def scan(self) -> bool: ...

    def records(self) -> List[Record]: ...

    def total_record_count(self) -> int: ...


class RecordInserter(Protocol):
    def insert(self, records: Sequence[Record]) -> None: ...


@dataclass
class PipelineResult:
    """Outcome of one pipeline run."""

    batches: int
    records: int
    elapsed_seconds: float
    scan_error: Optional[ScanError] = None


def iter_chunks(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Yield contiguous slices of at most ``size`` items; the last may be shorter."""
    if size <= 0:
        raise ValueError("Chunk size must be positive.")
    for begin in range(0, len(items), size):
        yield items[begin : begin + size]


class ExportPipeline:
    """
    Drive a scanner to exhaustion while ``concurrency`` workers insert batches.

    The scanner runs in the calling thread and hands one batch at a time to
    the workers through a rendezvous, so at most ``concurrency + 1`` batches
    are held in memory. Each worker splits its batch into chunks of
    ``recs_per_insert`` records, inserts them, then reports the batch size to
    the progress aggregator.
    """

    def __init__(
        self,
        scanner: RecordScanner,
        client: RecordInserter,
        *,
        concurrency: int,
        recs_per_insert: int = DEFAULT_RECS_PER_INSERT,
    ) -> None:
        if concurrency <= 0:
            raise ValueError("concurrency must be positive.")
        if recs_per_insert <= 0:
            raise ValueError("recs_per_insert must be positive.")
        self.scanner = scanner
        self.client = client
        self.concurrency = concurrency
        self.recs_per_insert = recs_per_insert
        self._handoff: Handoff[List[Record]] = Handoff()

    def run(self) -> PipelineResult:
        start = time.monotonic()
        progress = ProgressAggregator(self.scanner.total_record_count(), start_time=start)
        self._handoff = Handoff()
        progress.start()

        scan_error: Optional[ScanError] = None
        try:
            with ThreadPoolExecutor(max_workers=self.concurrency, thread_name_prefix="loader") as executor:
                futures = [executor.submit(self._load, worker_id, progress) for worker_id in range(self.concurrency)]
                try:
                    scan_error = self._produce()
                finally:
                    self._handoff.close()
                for future in futures:
                    future.result()
        finally:
            progress.close()
            progress.join()

        elapsed = time.monotonic() - start
        return PipelineResult(
            batches=progress.batches,
            records=progress.inserted,
            elapsed_seconds=elapsed,
            scan_error=scan_error,
        )

    def _produce(self) -> Optional[ScanError]:
        try:
            while self.scanner.scan():
                self._handoff.put(self.scanner.records())
        except ScanError as exc:
            logger.error(f"could not read ERA5 records: {exc}")
            return exc
        return None

    def _load(self, worker_id: int, progress: ProgressAggregator) -> None:
        for batch in self._handoff:
            try:
                for chunk in iter_chunks(batch, self.recs_per_insert):
                    self.client.insert(chunk)
            except Exception as exc:  # pylint: disable=broad-except
                logger.exception(f"loader[{worker_id}]: unexpected error inserting batch: {exc}")
            progress.report(len(batch))


def run_pipeline(
    scanner: RecordScanner,
    client: RecordInserter,
    *,
    concurrency: int,
    recs_per_insert: int = DEFAULT_RECS_PER_INSERT,
) -> PipelineResult:
    """Run the export pipeline once and return its result."""
    pipeline = ExportPipeline(scanner, client, concurrency=concurrency, recs_per_insert=recs_per_insert)
    return pipeline.run()

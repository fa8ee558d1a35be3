"""
Sequential batch runner for BatchBox Curves.

Drives the PixelTransformEngine across a list of BatchItems one at a time,
so at most one decoded image buffer is alive regardless of batch size.

Per-item lifecycle:

    pending -> processing -> done | failed

Items already DONE are skipped, which makes re-running a batch process only
what is left. FAILED items are retried on the next run. Per-item errors are
recorded on the item and logged; run() itself does not raise for them.

The lookup table and grade are snapshotted once when a run starts, so edits
made to the curve while a batch is in flight only affect later runs.

Example:
    >>> runner = BatchRunner()
    >>> runner.add_observer(lambda item: print(item.name, item.status.value))
    >>> summary = runner.run(session.items, curve.lut, ColorGrade(temperature=15))
    >>> summary.done, summary.failed
    (3, 0)

Classes:
    BatchRunSummary: Counts for one run
    BatchRunner: Sequential runner with status observers
"""

import concurrent.futures
import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from BB_Libs.BatchLib.batch_models import BatchItem, BatchStatus
from BB_Libs.ImageEditingLib.color_grade import ColorGrade
from BB_Libs.ImageEditingLib.pixel_transform import PixelTransformEngine

logger = logging.getLogger(__name__)

# Called with the item after each status change
StatusObserver = Callable[[BatchItem], None]

ELIGIBLE_STATUSES = (BatchStatus.PENDING, BatchStatus.FAILED)


@dataclass
class BatchRunSummary:
    """Outcome counts for one call to BatchRunner.run().

    Attributes:
        done: Items that reached DONE in this run
        failed: Items that reached FAILED in this run
        skipped: Items not eligible for this run (already DONE or in flight)
        cancelled: True if the run stopped early on the cancel event
    """
    done: int = 0
    failed: int = 0
    skipped: int = 0
    cancelled: bool = False

    @property
    def processed(self) -> int:
        return self.done + self.failed


class BatchRunner:
    """
    Runs the transform engine over batch items sequentially.
    """

    def __init__(self, engine: Optional[PixelTransformEngine] = None):
        self.engine = engine or PixelTransformEngine()
        self._observers: List[StatusObserver] = []
        self._executor: Optional[concurrent.futures.ThreadPoolExecutor] = None

    def add_observer(self, observer: StatusObserver) -> None:
        if not callable(observer):
            raise ValueError(f"observer must be callable, got {type(observer)}")
        self._observers.append(observer)

    def remove_observer(self, observer: StatusObserver) -> bool:
        if observer in self._observers:
            self._observers.remove(observer)
            return True
        return False

    def _notify(self, item: BatchItem) -> None:
        for observer in list(self._observers):
            try:
                observer(item)
            except Exception:
                logger.exception(f"Status observer failed for item {item.id}")

    def run(
        self,
        items: Sequence[BatchItem],
        lut: Sequence[int],
        grade: Optional[ColorGrade] = None,
        quality: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> BatchRunSummary:
        """
        Process every eligible item in insertion order.

        Args:
            items: Items to process; DONE items are skipped
            lut: 256-entry lookup table (copied at the start of the run)
            grade: Color grade applied before the table (default: neutral)
            quality: Encoding quality 0.0-1.0 (default: engine's setting)
            cancel_event: Checked before each item; when set, remaining
                          items are left untouched

        Returns:
            BatchRunSummary with counts for this run
        """
        lut_snapshot = tuple(lut)
        grade_snapshot = grade if grade is not None else ColorGrade()
        queue = list(items)
        summary = BatchRunSummary()

        logger.info(f"Starting batch run over {len(queue)} item(s)")

        for item in queue:
            if cancel_event is not None and cancel_event.is_set():
                summary.cancelled = True
                logger.info("Batch run cancelled")
                break

            if item.status not in ELIGIBLE_STATUSES:
                summary.skipped += 1
                continue

            self._process_item(item, lut_snapshot, grade_snapshot, quality, summary)

        logger.info(
            f"Batch run finished: {summary.done} done, {summary.failed} failed, "
            f"{summary.skipped} skipped"
        )
        return summary

    def _process_item(
        self,
        item: BatchItem,
        lut: Sequence[int],
        grade: ColorGrade,
        quality: Optional[float],
        summary: BatchRunSummary,
    ) -> None:
        item.mark_processing()
        self._notify(item)
        logger.debug(f"Processing {item.name} ({item.id})")

        try:
            output = self.engine.transform(item.source, lut, grade, quality=quality)
        except Exception as e:
            logger.warning(f"Failed to process {item.name}: {str(e)}")
            item.mark_failed(str(e))
            summary.failed += 1
        else:
            item.mark_done(output, self.engine.options.extension)
            summary.done += 1

        self._notify(item)

    def submit(
        self,
        items: Sequence[BatchItem],
        lut: Sequence[int],
        grade: Optional[ColorGrade] = None,
        quality: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> "concurrent.futures.Future[BatchRunSummary]":
        """
        Run the batch on a background worker and return its Future.

        Submitted runs execute one after another on a single worker thread.
        The lookup table is copied before returning, so later curve edits do
        not reach this run.
        """
        if self._executor is None:
            self._executor = concurrent.futures.ThreadPoolExecutor(
                max_workers=1,
                thread_name_prefix="batch-runner",
            )
        return self._executor.submit(
            self.run, list(items), tuple(lut), grade, quality, cancel_event
        )

    def shutdown(self, wait: bool = True) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
            self._executor = None

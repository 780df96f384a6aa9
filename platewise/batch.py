"""
Platewise Batch Processing

Runs the detection pipeline over a sequence of model responses, one at
a time, pausing between items so the upstream vision API is not
throttled.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Union

from platewise.config import PlatewiseConfig, DEFAULT_CONFIG
from platewise.schemas import BatchResult, ItemResult, ValidationPolicy, resolve_policy
from platewise.validator import process_response


logger = logging.getLogger(__name__)


# A raw response, or a zero-argument call that fetches one
RawItem = Union[str, Callable[[], str]]


@dataclass
class BatchRun:
    """Per-item results (input order) plus aggregate statistics"""
    results: List[ItemResult] = field(default_factory=list)
    summary: Optional[BatchResult] = None


class BatchProcessor:
    """
    Sequential batch runner.

    Items are processed strictly in order. Any exception raised while
    fetching or processing an item becomes a failed ItemResult, so one bad
    item never aborts the batch.
    """

    def __init__(
        self,
        policy: Optional[Union[ValidationPolicy, str]] = None,
        pacing_seconds: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
        config: Optional[PlatewiseConfig] = None
    ):
        """
        Initialize batch processor.

        Args:
            policy: Validation policy (defaults to the configured policy)
            pacing_seconds: Delay between items; 0 disables pacing
            sleep: Function used to wait between items
            config: Configuration (defaults to DEFAULT_CONFIG)
        """
        config = config or DEFAULT_CONFIG
        self.policy = resolve_policy(policy if policy is not None else config.default_policy)
        self.pacing_seconds = (
            config.batch_pacing_seconds if pacing_seconds is None else pacing_seconds
        )
        if self.pacing_seconds < 0:
            raise ValueError(f"Pacing must be >= 0, got {self.pacing_seconds}")
        self.sleep = sleep

    def process_item(self, item: RawItem) -> ItemResult:
        """Process a single raw response, converting errors to a failed result"""
        raw_text = None
        try:
            raw_text = item() if callable(item) else item
            if not isinstance(raw_text, str):
                raise TypeError(
                    f"Expected raw response text, got {type(raw_text).__name__}"
                )
            return process_response(raw_text, self.policy)
        except Exception as e:
            logger.error("Batch item failed: %s", e)
            return ItemResult.failed(
                str(e),
                raw_response=raw_text if isinstance(raw_text, str) else None
            )

    def process_batch(
        self,
        items: Iterable[RawItem],
        should_stop: Optional[Callable[[], bool]] = None
    ) -> BatchRun:
        """
        Process items in order.

        Args:
            items: Raw responses or callables producing them
            should_stop: Checked before each item; returning True ends the
                run and the results cover only the items already processed

        Returns:
            BatchRun with one result per processed item
        """
        results: List[ItemResult] = []

        for index, item in enumerate(items):
            if should_stop is not None and should_stop():
                logger.info("Batch stopped by caller after %d items", index)
                break
            if index > 0 and self.pacing_seconds > 0:
                self.sleep(self.pacing_seconds)
            results.append(self.process_item(item))

        summary = summarize_results(results)
        logger.info(
            "Batch complete: %d/%d items succeeded, %d detections",
            summary.success_count, summary.total_items, summary.total_detections
        )
        return BatchRun(results=results, summary=summary)


def summarize_results(results: List[ItemResult]) -> BatchResult:
    """
    Fold per-item results into batch statistics.

    Average confidence only counts detections that carry a confidence;
    detections without one are left out of both sum and count.
    """
    total_items = len(results)
    success_count = sum(1 for r in results if r.success)
    total_detections = sum(r.total_detected for r in results)

    confidences = [
        d.confidence_score
        for r in results
        for d in r.detections
        if d.confidence_score is not None
    ]

    return BatchResult(
        total_items=total_items,
        success_count=success_count,
        total_detections=total_detections,
        average_detections_per_item=(
            total_detections / total_items if total_items > 0 else 0.0
        ),
        average_confidence=(
            sum(confidences) / len(confidences) if confidences else None
        ),
        timestamps_extracted=sum(1 for r in results if r.has_timestamp()),
    )

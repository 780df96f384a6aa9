"""
Tests for Batch Processing

Tests ordering, failure isolation, pacing and statistics.
"""

import json
from datetime import datetime

import pytest

from platewise.batch import BatchProcessor, summarize_results
from platewise.config import PlatewiseConfig
from platewise.schemas import ItemResult, ValidatedDetection, ValidationPolicy


def vehicle_response(plate, color="white", vehicle_type="sedan", confidence=None, timestamp=None):
    vehicle = {"plate_number": plate, "color": color, "type": vehicle_type}
    if confidence is not None:
        vehicle["confidence_score"] = confidence
    payload = {"vehicles": [vehicle]}
    if timestamp:
        payload["timestamp"] = timestamp
    return json.dumps(payload)


def detection(plate, confidence=None):
    return ValidatedDetection(
        plate_number=plate, color="Red", vehicle_type="Sedan", confidence_score=confidence
    )


class SleepRecorder:
    """Stand-in for time.sleep"""

    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)


class TestBatchProcessing:
    """Test sequential batch runs"""

    def test_order_and_isolation(self):
        """Test a malformed item fails alone and order is preserved"""
        processor = BatchProcessor(policy=ValidationPolicy.STRICT, pacing_seconds=0)
        run = processor.process_batch([
            vehicle_response("ABC-123"),
            "Invalid JSON response",
            vehicle_response("XYZ-789", color="red"),
        ])

        assert len(run.results) == 3
        assert run.results[0].success
        assert not run.results[1].success
        assert run.results[2].success
        assert run.results[0].detections[0].plate_number == "ABC-123"
        assert run.results[2].detections[0].plate_number == "XYZ-789"

    def test_exception_becomes_failed_item(self):
        """Test an item whose fetch raises does not abort the batch"""
        def failing_call():
            raise RuntimeError("API Error")

        processor = BatchProcessor(policy="traffic_camera", pacing_seconds=0)
        run = processor.process_batch([
            lambda: vehicle_response("2224865"),
            failing_call,
            lambda: vehicle_response("ABC-123"),
        ])

        assert [r.success for r in run.results] == [True, False, True]
        assert run.results[1].error == "API Error"
        assert run.results[1].detections == []
        assert run.summary.success_count == 2

    def test_non_text_item_fails(self):
        """Test a call returning no text is a failed item"""
        processor = BatchProcessor(pacing_seconds=0)
        result = processor.process_item(lambda: None)

        assert not result.success
        assert "NoneType" in result.error

    def test_pacing_between_items(self):
        """Test the delay runs between items, not after the last"""
        sleep = SleepRecorder()
        processor = BatchProcessor(pacing_seconds=0.5, sleep=sleep)
        processor.process_batch([vehicle_response("AB1"), vehicle_response("AB2"), vehicle_response("AB3")])

        assert sleep.calls == [0.5, 0.5]

    def test_zero_pacing_never_sleeps(self):
        """Test pacing can be disabled"""
        sleep = SleepRecorder()
        processor = BatchProcessor(pacing_seconds=0, sleep=sleep)
        processor.process_batch([vehicle_response("AB1"), vehicle_response("AB2")])

        assert sleep.calls == []

    def test_pacing_from_config(self):
        """Test pacing and policy default to the configuration"""
        config = PlatewiseConfig(default_policy="lenient", batch_pacing_seconds=2.0)
        processor = BatchProcessor(config=config)

        assert processor.pacing_seconds == 2.0
        assert processor.policy == ValidationPolicy.LENIENT

    def test_should_stop(self):
        """Test caller can stop between items"""
        processed = []

        def fetch(plate):
            def call():
                processed.append(plate)
                return vehicle_response(plate)
            return call

        processor = BatchProcessor(pacing_seconds=0)
        run = processor.process_batch(
            [fetch("AB1"), fetch("AB2"), fetch("AB3")],
            should_stop=lambda: len(processed) >= 2
        )

        assert processed == ["AB1", "AB2"]
        assert len(run.results) == 2
        assert run.summary.total_items == 2

    def test_invalid_arguments(self):
        """Test bad policy or pacing raise immediately"""
        with pytest.raises(ValueError):
            BatchProcessor(policy="bogus")
        with pytest.raises(ValueError):
            BatchProcessor(pacing_seconds=-1)

    def test_statistics_from_run(self):
        """Test summary of a real run"""
        processor = BatchProcessor(policy="traffic_camera", pacing_seconds=0)
        run = processor.process_batch([
            vehicle_response("2224865", confidence=95, timestamp="22/09/2025 15:55:54"),
            vehicle_response("XYZ-789", confidence=92, timestamp="22/09/2025 15:56:10"),
            json.dumps({"vehicles": []}),
        ])
        summary = run.summary

        assert summary.total_items == 3
        assert summary.success_count == 2
        assert summary.total_detections == 2
        assert summary.timestamps_extracted == 2
        assert summary.average_confidence == pytest.approx(93.5)


class TestSummarizeResults:
    """Test statistics folding"""

    def test_average_confidence_ignores_missing(self):
        """Test detections without confidence are excluded from the mean"""
        results = [
            ItemResult(success=True, detections=[detection("AB1", 95), detection("AB2", 88)]),
            ItemResult(success=True, detections=[detection("AB3")]),
        ]
        summary = summarize_results(results)

        assert summary.average_confidence == (95 + 88) / 2
        assert summary.total_detections == 3
        assert summary.average_detections_per_item == 1.5

    def test_empty_batch(self):
        """Test statistics over no items"""
        summary = summarize_results([])

        assert summary.total_items == 0
        assert summary.average_detections_per_item == 0.0
        assert summary.average_confidence is None
        assert summary.success_rate == 0.0
        assert summary.quality_score == 0.0

    def test_success_rate(self):
        """Test success rate and quality score"""
        results = [
            ItemResult(success=True, detections=[detection("AB1")]),
            ItemResult.failed("boom"),
            ItemResult(success=False),
            ItemResult(success=True, detections=[detection("AB2")]),
        ]
        summary = summarize_results(results)

        assert summary.success_rate == 0.5
        assert summary.quality_score == 50.0

    def test_timestamps_counted_per_item(self):
        """Test timestamp count uses item or detection timestamps"""
        with_ts = detection("AB1")
        with_ts.timestamp = datetime(2025, 9, 22, 15, 55, 54)
        results = [
            ItemResult(success=True, detections=[with_ts]),
            ItemResult(success=False, timestamp=datetime(2025, 9, 22, 16, 0, 0)),
            ItemResult(success=True, detections=[detection("AB2")]),
        ]

        assert summarize_results(results).timestamps_extracted == 2

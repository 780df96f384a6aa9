"""
Platewise - Vehicle Detection Interpretation

Turns free-form vision-model output into validated vehicle detections
(plate, color, type, confidence, camera timestamp) under a selectable
validation policy.
"""

from platewise.schemas import (
    ValidationPolicy,
    DetectionCandidate,
    ValidatedDetection,
    ParseResult,
    ItemResult,
    BatchResult,
    RejectionReason,
)
from platewise.validator import (
    validate_candidate,
    process_response,
)
from platewise.batch import BatchProcessor, BatchRun, summarize_results

__version__ = "1.0.0"

__all__ = [
    "ValidationPolicy",
    "DetectionCandidate",
    "ValidatedDetection",
    "ParseResult",
    "ItemResult",
    "BatchResult",
    "RejectionReason",
    "validate_candidate",
    "process_response",
    "BatchProcessor",
    "BatchRun",
    "summarize_results",
]

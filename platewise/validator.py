"""
Platewise Detection Validation

Turns parsed candidates into canonical detections under a validation
policy. Malformed input never raises here: candidates that fail a check
are dropped with a reason. Only programmer errors (an unknown policy)
raise.
"""

import logging
import math
import uuid
from typing import List, Optional, Union

from platewise.schemas import (
    CandidateOutcome,
    DetectionCandidate,
    ItemResult,
    ParseResult,
    RejectionReason,
    ValidatedDetection,
    ValidationPolicy,
    resolve_policy,
    rules_for,
)
from platewise.plates.normalize import normalize_plate, check_plate
from platewise.vehicles.canonicalize import canonicalize_color, canonicalize_type
from platewise.vehicles.vocabulary import UNKNOWN
from platewise.vision.response_parser import parse_response
from platewise.vision.timestamps import first_timestamp


logger = logging.getLogger(__name__)


def _present(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def clamp_confidence(value: Optional[float]) -> Optional[float]:
    """Clamp a confidence score to 0-100; None and NaN/inf become None"""
    if value is None:
        return None
    value = float(value)
    if not math.isfinite(value):
        return None
    return max(0.0, min(100.0, value))


def validate_candidate(
    candidate: DetectionCandidate,
    policy: Union[ValidationPolicy, str] = ValidationPolicy.STRICT
) -> CandidateOutcome:
    """
    Validate one candidate.

    Steps:
    1. Required fields (plate always; color and type unless lenient)
    2. Normalize and validate the plate
    3. Canonicalize color and type (default to "unknown" when lenient)
    4. Clamp confidence to 0-100
    5. Attach a camera timestamp if one can be extracted

    Args:
        candidate: Unvalidated candidate
        policy: Validation policy

    Returns:
        CandidateOutcome holding either the detection or the rejection
    """
    rules = rules_for(policy)

    missing = []
    if not _present(candidate.plate_text):
        missing.append("plate")
    if rules.require_color_and_type:
        if not _present(candidate.color_text):
            missing.append("color")
        if not _present(candidate.type_text):
            missing.append("type")
    if missing:
        return CandidateOutcome(
            reason=RejectionReason.FIELD_MISSING,
            detail=f"missing {', '.join(missing)}"
        )

    plate = normalize_plate(candidate.plate_text, policy)
    plate_check = check_plate(plate, policy)
    if not plate_check.accepted:
        return CandidateOutcome(
            reason=RejectionReason.PLATE_REJECTED,
            detail=f"{candidate.plate_text!r} -> {plate!r}: {plate_check.reason}"
        )

    color = canonicalize_color(candidate.color_text)
    vehicle_type = canonicalize_type(candidate.type_text, rules.allow_motorcycle)

    if color is None or vehicle_type is None:
        if not rules.default_on_vocabulary_miss:
            unmatched = candidate.color_text if color is None else candidate.type_text
            return CandidateOutcome(
                reason=RejectionReason.VOCABULARY_MISS,
                detail=f"no canonical match for {unmatched!r}"
            )
        color = color or UNKNOWN
        vehicle_type = vehicle_type or UNKNOWN

    detection = ValidatedDetection(
        plate_number=plate,
        color=color,
        vehicle_type=vehicle_type,
        confidence_score=clamp_confidence(candidate.confidence_raw),
        timestamp=first_timestamp(candidate.timestamp_text, candidate.camera_metadata),
        detection_id=uuid.uuid4().hex,
    )
    return CandidateOutcome(detection=detection)


def validate_parse_result(
    parsed: ParseResult,
    policy: Union[ValidationPolicy, str] = ValidationPolicy.STRICT,
    raw_response: Optional[str] = None
) -> ItemResult:
    """
    Validate every candidate of a parsed response.

    An item with zero accepted candidates is reported with success=False;
    that is an expected outcome, not an error.
    """
    policy = resolve_policy(policy)

    detections: List[ValidatedDetection] = []
    rejections: List[CandidateOutcome] = []

    for candidate in parsed.candidates:
        outcome = validate_candidate(candidate, policy)
        if outcome.accepted:
            detections.append(outcome.detection)
        else:
            logger.debug("Rejected candidate (%s): %s", outcome.reason.value, outcome.detail)
            rejections.append(outcome)

    return ItemResult(
        success=len(detections) > 0,
        detections=detections,
        parse_failed=parsed.parse_failed,
        rejections=rejections,
        timestamp=first_timestamp(parsed.timestamp_text, parsed.camera_metadata),
        camera_metadata=parsed.camera_metadata,
        raw_response=raw_response,
    )


def process_response(
    raw_text: str,
    policy: Union[ValidationPolicy, str] = ValidationPolicy.STRICT
) -> ItemResult:
    """
    Run the full pipeline over one raw model response.

    Args:
        raw_text: Text returned by the vision model
        policy: Validation policy

    Returns:
        ItemResult with the accepted detections

    Raises:
        ValueError: if policy is not a known ValidationPolicy
    """
    policy = resolve_policy(policy)
    parsed = parse_response(raw_text)
    result = validate_parse_result(parsed, policy, raw_response=raw_text)

    logger.debug(
        "Processed response under %s policy: %d accepted, %d rejected",
        policy.value, result.total_detected, len(result.rejections)
    )
    return result

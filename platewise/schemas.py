"""
Platewise Schema Definitions

Core data structures for turning vision-model text into vehicle detections.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Union
from datetime import datetime
from enum import Enum

from platewise.vehicles.vocabulary import VehicleColor, VehicleType, UNKNOWN


class ValidationPolicy(str, Enum):
    """Strictness policy applied to every candidate"""
    LENIENT = "lenient"
    STRICT = "strict"
    TRAFFIC_CAMERA = "traffic_camera"


class RejectionReason(str, Enum):
    """Why a candidate was dropped"""
    FIELD_MISSING = "field_missing"
    PLATE_REJECTED = "plate_rejected"
    VOCABULARY_MISS = "vocabulary_miss"


@dataclass(frozen=True)
class PolicyRules:
    """Parameters a ValidationPolicy resolves to"""
    require_color_and_type: bool
    drop_disallowed_chars: bool  # keep only A-Z, 0-9 and dashes
    exclude_digits_only: bool  # digits/dashes only looks like a timestamp remnant
    default_on_vocabulary_miss: bool
    allow_motorcycle: bool


POLICY_RULES: Dict[ValidationPolicy, PolicyRules] = {
    ValidationPolicy.LENIENT: PolicyRules(
        require_color_and_type=False,
        drop_disallowed_chars=False,
        exclude_digits_only=False,
        default_on_vocabulary_miss=True,
        allow_motorcycle=True,
    ),
    ValidationPolicy.STRICT: PolicyRules(
        require_color_and_type=True,
        drop_disallowed_chars=True,
        exclude_digits_only=True,
        default_on_vocabulary_miss=False,
        allow_motorcycle=False,
    ),
    ValidationPolicy.TRAFFIC_CAMERA: PolicyRules(
        require_color_and_type=True,
        drop_disallowed_chars=False,
        exclude_digits_only=False,
        default_on_vocabulary_miss=False,
        allow_motorcycle=True,
    ),
}


def resolve_policy(policy: Union[ValidationPolicy, str]) -> ValidationPolicy:
    """
    Coerce a policy value or its string name.

    Raises:
        ValueError: if the value names no known policy
    """
    if isinstance(policy, ValidationPolicy):
        return policy
    if isinstance(policy, str):
        try:
            return ValidationPolicy(policy.strip().lower())
        except ValueError:
            pass
    raise ValueError(f"Unknown validation policy: {policy!r}")


def rules_for(policy: Union[ValidationPolicy, str]) -> PolicyRules:
    """Get the rule set for a policy"""
    return POLICY_RULES[resolve_policy(policy)]


@dataclass
class DetectionCandidate:
    """Unvalidated per-vehicle record pulled out of a model response"""
    plate_text: Optional[str] = None
    color_text: Optional[str] = None
    type_text: Optional[str] = None
    confidence_raw: Optional[float] = None
    timestamp_text: Optional[str] = None
    camera_metadata: Optional[str] = None


@dataclass
class ValidatedDetection:
    """Canonical vehicle detection"""
    plate_number: str
    color: str
    vehicle_type: str
    confidence_score: Optional[float] = None  # 0 - 100
    timestamp: Optional[datetime] = None
    detection_id: str = ""

    def __post_init__(self):
        if not self.plate_number:
            raise ValueError("plate_number must not be empty")
        if self.confidence_score is not None and not 0.0 <= self.confidence_score <= 100.0:
            raise ValueError(f"Confidence must be 0-100, got {self.confidence_score}")
        if self.color not in {c.value for c in VehicleColor} | {UNKNOWN}:
            raise ValueError(f"Color must be a canonical vehicle color, got {self.color!r}")
        if self.vehicle_type not in {t.value for t in VehicleType} | {UNKNOWN}:
            raise ValueError(f"Type must be a canonical vehicle type, got {self.vehicle_type!r}")

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation using the model's field names"""
        return {
            "id": self.detection_id,
            "plate_number": self.plate_number,
            "color": self.color,
            "type": self.vehicle_type,
            "confidence_score": self.confidence_score,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }


@dataclass
class ParseResult:
    """Candidates extracted from one raw response"""
    candidates: List[DetectionCandidate] = field(default_factory=list)
    parse_failed: bool = False
    used_fallback: bool = False
    timestamp_text: Optional[str] = None
    camera_metadata: Optional[str] = None


@dataclass
class PlateCheck:
    """Accept/reject decision for a normalized plate"""
    accepted: bool
    reason: Optional[str] = None


@dataclass
class CandidateOutcome:
    """Terminal state of one candidate: accepted or rejected"""
    detection: Optional[ValidatedDetection] = None
    reason: Optional[RejectionReason] = None
    detail: str = ""

    @property
    def accepted(self) -> bool:
        return self.detection is not None


@dataclass
class ItemResult:
    """Pipeline result for a single raw response"""
    success: bool
    detections: List[ValidatedDetection] = field(default_factory=list)
    parse_failed: bool = False
    rejections: List[CandidateOutcome] = field(default_factory=list)
    timestamp: Optional[datetime] = None
    camera_metadata: Optional[str] = None
    raw_response: Optional[str] = None
    error: Optional[str] = None

    @property
    def total_detected(self) -> int:
        return len(self.detections)

    def has_timestamp(self) -> bool:
        """Check if a timestamp was extracted for the item or any detection"""
        return self.timestamp is not None or any(
            d.timestamp is not None for d in self.detections
        )

    @classmethod
    def failed(cls, error: str, raw_response: Optional[str] = None) -> "ItemResult":
        """Result for an item whose processing raised"""
        return cls(success=False, raw_response=raw_response, error=error)


@dataclass
class BatchResult:
    """Aggregate statistics over a batch of raw responses"""
    total_items: int
    success_count: int
    total_detections: int
    average_detections_per_item: float
    average_confidence: Optional[float]
    timestamps_extracted: int

    @property
    def success_rate(self) -> float:
        if self.total_items == 0:
            return 0.0
        return self.success_count / self.total_items

    @property
    def quality_score(self) -> float:
        """Success rate as a percentage"""
        return self.success_rate * 100

"""
Platewise Response Models

Pydantic models for handing detections and batch statistics to the HTTP
and persistence layers. Field names follow the vision model's JSON.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from platewise.batch import BatchRun
from platewise.schemas import BatchResult, ItemResult, ValidatedDetection


class DetectionResponse(BaseModel):
    """Single validated vehicle detection"""
    id: str
    plate_number: str
    color: str
    type: str
    confidence_score: Optional[float] = Field(None, ge=0.0, le=100.0)
    timestamp: Optional[str] = None  # ISO format

    @classmethod
    def from_detection(cls, detection: ValidatedDetection) -> "DetectionResponse":
        return cls(**detection.to_dict())


class ItemResultResponse(BaseModel):
    """Result for one processed image"""
    success: bool
    cars: List[DetectionResponse] = Field(default_factory=list)
    total_detected: int = 0
    parse_failed: bool = False
    rejected: int = 0
    timestamp: Optional[str] = None
    camera_metadata: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_result(cls, result: ItemResult) -> "ItemResultResponse":
        return cls(
            success=result.success,
            cars=[DetectionResponse.from_detection(d) for d in result.detections],
            total_detected=result.total_detected,
            parse_failed=result.parse_failed,
            rejected=len(result.rejections),
            timestamp=result.timestamp.isoformat() if result.timestamp else None,
            camera_metadata=result.camera_metadata,
            error=result.error,
        )


class BatchSummaryResponse(BaseModel):
    """Aggregate batch statistics, averages rounded to 2 decimals"""
    total_items: int
    success_count: int
    total_detections: int
    average_detections_per_item: float
    average_confidence: Optional[float] = None
    timestamps_extracted: int
    success_rate: float
    quality_score: float

    @classmethod
    def from_summary(cls, summary: BatchResult) -> "BatchSummaryResponse":
        return cls(
            total_items=summary.total_items,
            success_count=summary.success_count,
            total_detections=summary.total_detections,
            average_detections_per_item=round(summary.average_detections_per_item, 2),
            average_confidence=(
                round(summary.average_confidence, 2)
                if summary.average_confidence is not None else None
            ),
            timestamps_extracted=summary.timestamps_extracted,
            success_rate=round(summary.success_rate, 4),
            quality_score=round(summary.quality_score, 2),
        )


class BatchResponse(BaseModel):
    """Full batch output: per-item results in input order plus summary"""
    results: List[ItemResultResponse]
    summary: BatchSummaryResponse

    @classmethod
    def from_run(cls, run: BatchRun) -> "BatchResponse":
        return cls(
            results=[ItemResultResponse.from_result(r) for r in run.results],
            summary=BatchSummaryResponse.from_summary(run.summary),
        )

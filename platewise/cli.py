"""
Platewise CLI

Runs saved vision-model responses through the detection pipeline.

Usage:
    platewise responses/*.txt --policy traffic_camera --pacing 0
    platewise response.json --json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional

from platewise.api_models import BatchResponse
from platewise.batch import BatchProcessor, BatchRun
from platewise.config import PlatewiseConfig
from platewise.schemas import ValidationPolicy


def _reader(path: Path) -> Callable[[], str]:
    return lambda: path.read_text(encoding="utf-8")


def print_summary(run: BatchRun, paths: List[Path]) -> None:
    """Print a human-readable batch report"""
    print("=" * 70)
    print("DETECTIONS")
    print("=" * 70)

    for path, result in zip(paths, run.results):
        status = "OK" if result.success else "NO DETECTIONS"
        print(f"\n{path.name}: {status}")
        if result.error:
            print(f"   Error: {result.error}")
        if result.parse_failed:
            print("   (structured parse failed, used text fallback)")
        for detection in result.detections:
            confidence = (
                f"{detection.confidence_score:.0f}%"
                if detection.confidence_score is not None else "n/a"
            )
            print(
                f"   {detection.plate_number:<15} {detection.color:<8} "
                f"{detection.vehicle_type:<10} conf: {confidence}"
            )
        if result.rejections:
            print(f"   Rejected candidates: {len(result.rejections)}")

    summary = run.summary
    print("\n" + "=" * 70)
    print("SUMMARY")
    print("=" * 70)
    print(f"   Items processed: {summary.total_items}")
    print(f"   Successful: {summary.success_count} ({summary.quality_score:.1f}%)")
    print(f"   Total detections: {summary.total_detections}")
    print(f"   Avg detections/item: {summary.average_detections_per_item:.2f}")
    if summary.average_confidence is not None:
        print(f"   Avg confidence: {summary.average_confidence:.2f}")
    print(f"   Timestamps extracted: {summary.timestamps_extracted}")


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point"""
    config = PlatewiseConfig.from_env()

    parser = argparse.ArgumentParser(
        description="Validate vehicle detections from saved vision-model responses"
    )
    parser.add_argument(
        "responses",
        nargs="+",
        help="Files each holding one raw model response"
    )
    parser.add_argument(
        "--policy",
        choices=[p.value for p in ValidationPolicy],
        default=config.default_policy.value,
        help="Validation policy"
    )
    parser.add_argument(
        "--pacing",
        type=float,
        default=config.batch_pacing_seconds,
        help="Seconds to wait between items (default: PLATEWISE_PACING_SECONDS)"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )

    paths = [Path(p) for p in args.responses]
    processor = BatchProcessor(
        policy=args.policy,
        pacing_seconds=args.pacing,
        config=config,
    )
    run = processor.process_batch([_reader(p) for p in paths])

    if args.json:
        print(BatchResponse.from_run(run).model_dump_json(indent=2))
    else:
        print_summary(run, paths)

    return 0 if run.summary.success_count > 0 else 1


if __name__ == "__main__":
    sys.exit(main())

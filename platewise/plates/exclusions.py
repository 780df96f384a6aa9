"""
Plate Exclusion Rules

Text that looks like a plate but is overlay noise: sentinel words,
dates, times and camera telemetry. Patterns are matched against the
whole normalized plate.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Pattern


@dataclass(frozen=True)
class ExclusionRule:
    """Named pattern identifying non-plate text"""
    name: str
    pattern: Pattern
    strict_only: bool = False


def _rule(name: str, regex: str, strict_only: bool = False) -> ExclusionRule:
    return ExclusionRule(name, re.compile(regex, re.IGNORECASE), strict_only)


EXCLUSION_RULES: List[ExclusionRule] = [
    _rule("sentinel_word", r"NOT|FOUND|NONE|NULL|UNDEFINED|UNKNOWN|NOT[-_]?FOUND|N/A"),
    _rule("iso_date", r"\d{4}[-/]\d{2}[-/]\d{2}.*"),
    _rule("time_of_day", r"\d{2}:\d{2}.*"),
    _rule("camera_id", r"CAM\d+.*"),
    _rule("vehicle_counter", r"VEHICLE.*"),
    _rule("non_vehicle_counter", r"NONVEHICLE.*"),
    _rule("person_counter", r"PERSON.*"),
    _rule("digits_and_dashes", r"[0-9-]+", strict_only=True),
]


def match_exclusion(plate: str, include_strict: bool = False) -> Optional[ExclusionRule]:
    """
    Find the first exclusion rule the plate fully matches.

    Args:
        plate: Normalized plate text
        include_strict: Also apply rules reserved for strict validation

    Returns:
        The matching rule, or None
    """
    for rule in EXCLUSION_RULES:
        if rule.strict_only and not include_strict:
            continue
        if rule.pattern.fullmatch(plate):
            return rule
    return None

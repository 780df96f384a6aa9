"""
Platewise License Plate Handling

Normalization, validation and exclusion of look-alike non-plate text.
"""

from platewise.plates.normalize import normalize_plate, check_plate, is_valid_plate
from platewise.plates.exclusions import ExclusionRule, EXCLUSION_RULES, match_exclusion

__all__ = [
    'normalize_plate',
    'check_plate',
    'is_valid_plate',
    'ExclusionRule',
    'EXCLUSION_RULES',
    'match_exclusion',
]

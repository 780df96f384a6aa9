"""
License Plate Normalization

Rewrites raw plate text into a canonical dash-separated form and decides
whether the result is a plausible plate.
"""

import re
from typing import Union

from platewise.schemas import PlateCheck, ValidationPolicy, rules_for
from platewise.plates.exclusions import match_exclusion


MIN_PLATE_LENGTH = 2
MAX_PLATE_LENGTH = 15

# Bullets, middle dots, periods, en/em dashes and whitespace runs all
# separate plate groups
SEPARATOR_RE = re.compile(r"[•·.–—]|\s+")
DASH_RUN_RE = re.compile(r"-{2,}")
DISALLOWED_RE = re.compile(r"[^A-Z0-9-]")
ALNUM_RE = re.compile(r"[A-Z0-9]", re.IGNORECASE)


def normalize_plate(
    plate_text: str,
    policy: Union[ValidationPolicy, str] = ValidationPolicy.STRICT
) -> str:
    """
    Normalize license plate text.

    Steps:
    1. Trim and convert to uppercase
    2. Map bullets, dots, en/em dashes and whitespace runs to "-"
    3. Strict only: drop everything outside A-Z, 0-9 and "-"
    4. Collapse repeated dashes and strip leading/trailing dashes

    Normalizing an already-normalized plate returns it unchanged.

    Args:
        plate_text: Raw plate text from the model
        policy: Validation policy

    Returns:
        Normalized plate string (may be empty)
    """
    rules = rules_for(policy)

    if not plate_text:
        return ""

    plate = plate_text.strip().upper()
    plate = SEPARATOR_RE.sub("-", plate)

    if rules.drop_disallowed_chars:
        plate = DISALLOWED_RE.sub("", plate)

    plate = DASH_RUN_RE.sub("-", plate)
    return plate.strip("-")


def check_plate(
    plate: str,
    policy: Union[ValidationPolicy, str] = ValidationPolicy.STRICT
) -> PlateCheck:
    """
    Validate a normalized plate.

    Checks short-circuit in order: length, alphanumeric presence,
    exclusion patterns.

    Args:
        plate: Normalized plate text
        policy: Validation policy

    Returns:
        PlateCheck with the rejection reason when not accepted
    """
    rules = rules_for(policy)

    if not MIN_PLATE_LENGTH <= len(plate) <= MAX_PLATE_LENGTH:
        return PlateCheck(
            accepted=False,
            reason=f"length {len(plate)} outside {MIN_PLATE_LENGTH}-{MAX_PLATE_LENGTH}"
        )

    if not ALNUM_RE.search(plate):
        return PlateCheck(accepted=False, reason="no alphanumeric characters")

    rule = match_exclusion(plate, include_strict=rules.exclude_digits_only)
    if rule is not None:
        return PlateCheck(accepted=False, reason=f"matches exclusion rule '{rule.name}'")

    return PlateCheck(accepted=True)


def is_valid_plate(
    plate: str,
    policy: Union[ValidationPolicy, str] = ValidationPolicy.STRICT
) -> bool:
    """Check if a normalized plate passes validation"""
    return check_plate(plate, policy).accepted

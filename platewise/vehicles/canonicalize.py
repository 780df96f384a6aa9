"""
Vehicle Attribute Canonicalization

Maps free-text colors and vehicle types onto the controlled vocabularies.
"""

import re
from enum import Enum
from typing import Dict, Iterable, Optional

from platewise.vehicles.vocabulary import (
    VehicleColor,
    VehicleType,
    COLOR_SYNONYMS,
    TYPE_SYNONYMS,
)


_WHITESPACE_RE = re.compile(r"\s+")


def _clean(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text.strip().lower())


def canonicalize(
    text: Optional[str],
    vocabulary: Iterable[Enum],
    synonyms: Dict[str, Enum]
) -> Optional[str]:
    """
    Map free text to a canonical vocabulary value.

    Lookup order: case-insensitive exact match against the vocabulary,
    then the synonym map.

    Args:
        text: Free text from the model
        vocabulary: Allowed canonical values
        synonyms: Lowercase variant -> canonical value

    Returns:
        Canonical value, or None when nothing matches
    """
    if not text or not isinstance(text, str):
        return None

    cleaned = _clean(text)
    allowed = {member.value for member in vocabulary}

    for value in allowed:
        if value.lower() == cleaned:
            return value

    match = synonyms.get(cleaned)
    if match is not None and match.value in allowed:
        return match.value

    return None


def canonicalize_color(text: Optional[str]) -> Optional[str]:
    """Canonical color for free text, or None"""
    return canonicalize(text, VehicleColor, COLOR_SYNONYMS)


def canonicalize_type(text: Optional[str], allow_motorcycle: bool = True) -> Optional[str]:
    """
    Canonical vehicle type for free text, or None.

    Args:
        text: Free text from the model
        allow_motorcycle: Whether Motorcycle is part of the vocabulary
    """
    vocabulary = [
        t for t in VehicleType
        if allow_motorcycle or t is not VehicleType.MOTORCYCLE
    ]
    return canonicalize(text, vocabulary, TYPE_SYNONYMS)

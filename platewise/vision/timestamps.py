"""
Camera Timestamp Extraction

Traffic cameras burn a "DD/MM/YYYY HH:MM:SS" overlay into each frame,
e.g. "Vehicle:1576 NonVehicle:0 Person:0 22/09/2025 15:55:54".
"""

import re
from datetime import datetime
from typing import Optional


# Day first, as observed on the camera overlays
CAMERA_TIMESTAMP_RE = re.compile(
    r"(\d{2})/(\d{2})/(\d{4})\s+(\d{2}):(\d{2}):(\d{2})"
)


def extract_timestamp(camera_metadata: Optional[str]) -> Optional[datetime]:
    """
    Pull a camera timestamp out of free-text metadata.

    Args:
        camera_metadata: Overlay text read by the model (may be None)

    Returns:
        Naive datetime, or None if no valid timestamp is present
    """
    if not camera_metadata or not isinstance(camera_metadata, str):
        return None

    match = CAMERA_TIMESTAMP_RE.search(camera_metadata)
    if not match:
        return None

    try:
        day, month, year, hour, minute, second = (int(g) for g in match.groups())
        return datetime(year, month, day, hour, minute, second)
    except ValueError:
        # Impossible calendar values such as month 13
        return None


def first_timestamp(*texts: Optional[str]) -> Optional[datetime]:
    """Timestamp from the first text that yields one"""
    for text in texts:
        ts = extract_timestamp(text)
        if ts is not None:
            return ts
    return None

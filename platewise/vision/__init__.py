"""
Platewise Vision Response Handling

Parsing of vision-model text and camera overlay timestamps.
"""

from platewise.vision.response_parser import parse_response, extract_from_prose
from platewise.vision.timestamps import extract_timestamp

__all__ = [
    'parse_response',
    'extract_from_prose',
    'extract_timestamp',
]

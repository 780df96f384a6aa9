"""
Platewise Vehicle Attributes

Controlled color/type vocabularies and canonicalization of free text.
"""

from platewise.vehicles.vocabulary import VehicleColor, VehicleType, UNKNOWN
from platewise.vehicles.canonicalize import canonicalize, canonicalize_color, canonicalize_type

__all__ = [
    'VehicleColor',
    'VehicleType',
    'UNKNOWN',
    'canonicalize',
    'canonicalize_color',
    'canonicalize_type',
]

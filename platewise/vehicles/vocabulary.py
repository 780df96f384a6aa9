"""
Vehicle Vocabularies

Controlled color and type vocabularies plus synonym maps for the free
text a vision model tends to produce.
"""

from enum import Enum
from typing import Dict, FrozenSet


class VehicleColor(str, Enum):
    """Vehicle color categories"""
    RED = "Red"
    BLUE = "Blue"
    GREEN = "Green"
    YELLOW = "Yellow"
    BLACK = "Black"
    WHITE = "White"
    GRAY = "Gray"
    SILVER = "Silver"
    BROWN = "Brown"
    ORANGE = "Orange"


class VehicleType(str, Enum):
    """Vehicle body types"""
    SEDAN = "Sedan"
    SUV = "SUV"
    PICKUP = "Pickup"
    TRUCK = "Truck"
    BUS = "Bus"
    MOTORCYCLE = "Motorcycle"


# Substituted for a color/type with no canonical match under lenient validation
UNKNOWN = "unknown"


COLOR_SYNONYMS: Dict[str, VehicleColor] = {
    "grey": VehicleColor.GRAY,
    "dark gray": VehicleColor.GRAY,
    "dark grey": VehicleColor.GRAY,
    "light gray": VehicleColor.GRAY,
    "light grey": VehicleColor.GRAY,
    "dark blue": VehicleColor.BLUE,
    "light blue": VehicleColor.BLUE,
    "navy": VehicleColor.BLUE,
    "navy blue": VehicleColor.BLUE,
    "maroon": VehicleColor.RED,
    "burgundy": VehicleColor.RED,
    "crimson": VehicleColor.RED,
    "lime": VehicleColor.GREEN,
    "forest green": VehicleColor.GREEN,
    "dark green": VehicleColor.GREEN,
    "beige": VehicleColor.BROWN,
    "tan": VehicleColor.BROWN,
    "cream": VehicleColor.WHITE,
    "off-white": VehicleColor.WHITE,
    "off white": VehicleColor.WHITE,
    "pearl white": VehicleColor.WHITE,
    "charcoal": VehicleColor.BLACK,
    "gold": VehicleColor.YELLOW,
    "golden": VehicleColor.YELLOW,
    "metallic silver": VehicleColor.SILVER,
}

TYPE_SYNONYMS: Dict[str, VehicleType] = {
    "car": VehicleType.SEDAN,
    "automobile": VehicleType.SEDAN,
    "vehicle": VehicleType.SEDAN,
    "saloon": VehicleType.SEDAN,
    "sport utility vehicle": VehicleType.SUV,
    "pickup truck": VehicleType.PICKUP,
    "pick-up": VehicleType.PICKUP,
    "pick-up truck": VehicleType.PICKUP,
    "bakkie": VehicleType.PICKUP,
    "lorry": VehicleType.TRUCK,
    "semi": VehicleType.TRUCK,
    "trailer": VehicleType.TRUCK,
    "coach": VehicleType.BUS,
    "minibus": VehicleType.BUS,
    "bike": VehicleType.MOTORCYCLE,
    "motorbike": VehicleType.MOTORCYCLE,
    "motor cycle": VehicleType.MOTORCYCLE,
    "scooter": VehicleType.MOTORCYCLE,
}

# Every lowercase phrase that canonicalizes to some value; used to spot
# color/type words in free prose
COLOR_WORDS: FrozenSet[str] = frozenset(
    [c.value.lower() for c in VehicleColor] + list(COLOR_SYNONYMS)
)
TYPE_WORDS: FrozenSet[str] = frozenset(
    [t.value.lower() for t in VehicleType] + list(TYPE_SYNONYMS)
)

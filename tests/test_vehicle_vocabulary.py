"""
Tests for Vehicle Attribute Canonicalization

Tests color and vehicle type mapping onto the controlled vocabularies.
"""

from platewise.vehicles.vocabulary import (
    VehicleColor,
    VehicleType,
    COLOR_SYNONYMS,
    TYPE_SYNONYMS,
    COLOR_WORDS,
    TYPE_WORDS,
)
from platewise.vehicles.canonicalize import canonicalize_color, canonicalize_type


class TestColorCanonicalization:
    """Test color canonicalization"""

    def test_exact_match_any_case(self):
        """Test vocabulary colors match case-insensitively"""
        assert canonicalize_color("red") == "Red"
        assert canonicalize_color("  WHITE ") == "White"
        assert canonicalize_color("Silver") == "Silver"

    def test_synonyms(self):
        """Test common variations map to canonical colors"""
        assert canonicalize_color("grey") == "Gray"
        assert canonicalize_color("navy") == "Blue"
        assert canonicalize_color("maroon") == "Red"
        assert canonicalize_color("lime") == "Green"
        assert canonicalize_color("beige") == "Brown"
        assert canonicalize_color("cream") == "White"
        assert canonicalize_color("gold") == "Yellow"

    def test_multi_word_synonym_whitespace(self):
        """Test internal whitespace is collapsed before lookup"""
        assert canonicalize_color("Dark   Blue") == "Blue"
        assert canonicalize_color("off-white") == "White"

    def test_no_match(self):
        """Test unrecognized or missing colors"""
        assert canonicalize_color("turquoise") is None
        assert canonicalize_color("") is None
        assert canonicalize_color(None) is None
        assert canonicalize_color("unknown") is None


class TestTypeCanonicalization:
    """Test vehicle type canonicalization"""

    def test_exact_match(self):
        """Test vocabulary types match case-insensitively"""
        assert canonicalize_type("sedan") == "Sedan"
        assert canonicalize_type("suv") == "SUV"
        assert canonicalize_type("PICKUP") == "Pickup"
        assert canonicalize_type("Bus") == "Bus"

    def test_synonyms(self):
        """Test common variations map to canonical types"""
        assert canonicalize_type("car") == "Sedan"
        assert canonicalize_type("lorry") == "Truck"
        assert canonicalize_type("Pickup Truck") == "Pickup"
        assert canonicalize_type("coach") == "Bus"
        assert canonicalize_type("motorbike") == "Motorcycle"

    def test_motorcycle_can_be_excluded(self):
        """Test Motorcycle drops out of the vocabulary when not allowed"""
        assert canonicalize_type("motorcycle", allow_motorcycle=False) is None
        assert canonicalize_type("motorbike", allow_motorcycle=False) is None
        assert canonicalize_type("lorry", allow_motorcycle=False) == "Truck"

    def test_no_match(self):
        """Test unrecognized types"""
        assert canonicalize_type("spaceship") is None
        assert canonicalize_type(None) is None


class TestVocabularyTables:
    """Test vocabulary table consistency"""

    def test_synonyms_point_into_vocabulary(self):
        """Test every synonym resolves to a vocabulary member"""
        assert all(isinstance(v, VehicleColor) for v in COLOR_SYNONYMS.values())
        assert all(isinstance(v, VehicleType) for v in TYPE_SYNONYMS.values())

    def test_synonym_keys_are_lowercase(self):
        """Test lookup keys are stored lowercase"""
        for key in list(COLOR_SYNONYMS) + list(TYPE_SYNONYMS):
            assert key == key.lower()

    def test_word_sets_cover_canonical_values(self):
        """Test the prose word sets include canonical values"""
        assert "gray" in COLOR_WORDS
        assert "grey" in COLOR_WORDS
        assert "suv" in TYPE_WORDS
        assert "lorry" in TYPE_WORDS

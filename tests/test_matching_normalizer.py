"""
Tests for matching.normalizer module.

Tests cover:
- Case and surrounding-whitespace insensitivity
- Relationship equality on (cause, effect) only
- Mixed entity/relationship comparisons
- item_key identity for hashing
"""

from extraction_eval.matching.models import CausalRelationship
from extraction_eval.matching.normalizer import (
    item_key,
    items_equal,
    normalize,
    relationships_equal,
    strings_equal,
)


class TestNormalize:
    """Test normalize() function."""

    def test_lowercases(self):
        assert normalize("Heavy Rain") == "heavy rain"

    def test_strips_surrounding_whitespace(self):
        assert normalize("  flooding\n") == "flooding"

    def test_keeps_inner_whitespace(self):
        """Only surrounding whitespace is removed."""
        assert normalize("heavy  rain") == "heavy  rain"

    def test_empty_string(self):
        assert normalize("   ") == ""


class TestStringsEqual:
    """Test strings_equal() function."""

    def test_case_insensitive(self):
        assert strings_equal("Smoking", "smoking")

    def test_whitespace_insensitive(self):
        assert strings_equal(" lung cancer ", "Lung Cancer")

    def test_different_strings(self):
        assert not strings_equal("cancer", "lung cancer")


class TestRelationshipsEqual:
    """Test relationships_equal() function."""

    def test_equal_under_normalization(self):
        a = CausalRelationship(cause="Heavy Rain", effect="Flooding")
        b = CausalRelationship(cause="heavy rain ", effect=" flooding")
        assert relationships_equal(a, b)

    def test_location_and_confidence_ignored(self):
        a = CausalRelationship(
            cause="rain", effect="flooding", location="city", confidence=0.9
        )
        b = CausalRelationship(cause="rain", effect="flooding", location="town")
        assert relationships_equal(a, b)

    def test_reversed_direction_not_equal(self):
        a = CausalRelationship(cause="rain", effect="flooding")
        b = CausalRelationship(cause="flooding", effect="rain")
        assert not relationships_equal(a, b)

    def test_effect_differs(self):
        a = CausalRelationship(cause="rain", effect="flooding")
        b = CausalRelationship(cause="rain", effect="floods")
        assert not relationships_equal(a, b)


class TestItemsEqual:
    """Test items_equal() dispatch."""

    def test_entities(self):
        assert items_equal("City", "city")

    def test_relationships(self):
        assert items_equal(
            CausalRelationship(cause="A", effect="B"),
            CausalRelationship(cause="a", effect="b"),
        )

    def test_entity_never_equals_relationship(self):
        rel = CausalRelationship(cause="rain", effect="flooding")
        assert not items_equal("rain -> flooding", rel)
        assert not items_equal(rel, "rain -> flooding")


class TestItemKey:
    """Test item_key() function."""

    def test_entity_key_is_one_tuple(self):
        assert item_key(" Flooding ") == ("flooding",)

    def test_relationship_key(self):
        rel = CausalRelationship(cause="Rain", effect="Flooding", location="city")
        assert item_key(rel) == ("rain", "flooding")

    def test_equal_items_share_key(self):
        assert item_key("Smoking") == item_key("smoking ")

    def test_kinds_never_collide(self):
        assert item_key("rain") != item_key(
            CausalRelationship(cause="rain", effect="rain")
        )

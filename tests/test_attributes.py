"""Tests for primary and secondary attributes."""

import pytest

from models.attributes import (
    PRIMARY_ATTRIBUTES,
    SECONDARY_ATTRIBUTES,
    Attribute,
    PrimaryAttributes,
    UnsupportedAttributeError,
    secondary_value,
)


class TestSecondaryValue:
    """Tests for secondary_value()."""

    def test_zero_primaries_give_base_values(self):
        p = PrimaryAttributes()
        assert secondary_value(Attribute.HEALTH_POINTS, p) == 1000
        assert secondary_value(Attribute.MANA, p) == 500
        assert secondary_value(Attribute.MANA_REGEN, p) == 100
        assert secondary_value(Attribute.CRIT_CHANCE, p) == pytest.approx(0.05)
        assert secondary_value(Attribute.DODGE_CHANCE, p) == pytest.approx(0.05)
        assert secondary_value(Attribute.SPECIAL_DAMAGE, p) == 800

    def test_intelligence_two(self):
        p = PrimaryAttributes(intelligence=2, abilities=0)
        assert secondary_value(Attribute.CRIT_CHANCE, p) == pytest.approx(0.07)
        assert secondary_value(Attribute.MANA, p) == 1500
        assert secondary_value(Attribute.MANA_REGEN, p) == 200
        assert secondary_value(Attribute.DODGE_CHANCE, p) == pytest.approx(0.09)

    def test_each_primary_feeds_its_formula(self):
        p = PrimaryAttributes(intelligence=1, health=3, special=4, abilities=5)
        assert secondary_value(Attribute.HEALTH_POINTS, p) == 4000
        assert secondary_value(Attribute.SPECIAL_DAMAGE, p) == 1200
        assert secondary_value(Attribute.CRIT_CHANCE, p) == pytest.approx(0.05 + 0.01 + 0.10)
        assert secondary_value(Attribute.DODGE_CHANCE, p) == pytest.approx(0.05 + 0.02 + 0.05)

    def test_repeated_calls_are_pure(self):
        p = PrimaryAttributes(intelligence=3, special=2)
        first = [secondary_value(a, p) for a in SECONDARY_ATTRIBUTES]
        second = [secondary_value(a, p) for a in SECONDARY_ATTRIBUTES]
        assert first == second
        assert p == PrimaryAttributes(intelligence=3, special=2)

    @pytest.mark.parametrize("attr", PRIMARY_ATTRIBUTES)
    def test_primary_attribute_rejected(self, attr):
        with pytest.raises(UnsupportedAttributeError, match="not a secondary"):
            secondary_value(attr, PrimaryAttributes())


class TestPrimaryAttributes:
    """Tests for PrimaryAttributes."""

    def test_get_primary(self):
        p = PrimaryAttributes(intelligence=2, health=1, special=1)
        assert p.get(Attribute.INTELLIGENCE) == 2
        assert p.get(Attribute.ABILITIES) == 0
        assert p.total == 4

    @pytest.mark.parametrize("attr", SECONDARY_ATTRIBUTES)
    def test_get_secondary_rejected(self, attr):
        with pytest.raises(UnsupportedAttributeError, match="not a primary"):
            PrimaryAttributes().get(attr)

    def test_negative_values_rejected(self):
        with pytest.raises(ValueError):
            PrimaryAttributes(health=-1)

    def test_attribute_sets_are_disjoint(self):
        assert set(PRIMARY_ATTRIBUTES).isdisjoint(SECONDARY_ATTRIBUTES)
        assert len(PRIMARY_ATTRIBUTES) + len(SECONDARY_ATTRIBUTES) == len(Attribute)

"""Tests for character creation and attribute allocation."""

import pytest

from engine.progression import (
    PREMADE_CLASSES,
    allocate_attribute_points,
    award_experience,
    can_level_up,
    create_player,
    earned_attribute_points,
    unspent_attribute_points,
)
from models.attributes import Attribute, UnsupportedAttributeError


class TestCreatePlayer:
    """Tests for create_player()."""

    @pytest.mark.parametrize("class_type", list(PREMADE_CLASSES))
    def test_premade_classes(self, class_type):
        player = create_player("Hero", class_type)

        assert player.class_type == class_type
        assert player.experience == 0
        assert player.attributes.total == 4
        assert player.current_health == player.max_health == 2000
        assert player.current_mana == 500

    def test_players_do_not_share_attributes(self):
        first = create_player("A", "Mage 1")
        second = create_player("B", "Mage 1")
        first.attributes.health += 1
        assert second.attributes.health == 1
        assert PREMADE_CLASSES["Mage 1"].health == 1

    def test_unknown_class(self):
        with pytest.raises(ValueError):
            create_player("Hero", "Paladin")


class TestExperience:
    """Tests for experience and earned points."""

    @pytest.mark.parametrize("experience, points", [(0, 4), (49, 4), (50, 6), (120, 8)])
    def test_earned_points(self, experience, points):
        assert earned_attribute_points(experience) == points

    def test_award_experience(self):
        player = create_player("Hero", "Mage 1")
        award_experience(player, 30)
        award_experience(player, 25)

        assert player.experience == 55
        assert unspent_attribute_points(player) == 2
        assert can_level_up(player)

    def test_negative_experience_rejected(self):
        player = create_player("Hero", "Mage 1")
        with pytest.raises(ValueError):
            award_experience(player, -1)
        assert player.experience == 0

    def test_new_player_cannot_level_up(self):
        assert not can_level_up(create_player("Hero", "Mage 1"))


class TestAllocateAttributePoints:
    """Tests for allocate_attribute_points()."""

    def test_allocate(self):
        player = create_player("Hero", "Mage 1")
        award_experience(player, 100)

        allocate_attribute_points(player, Attribute.HEALTH, 3)
        allocate_attribute_points(player, Attribute.ABILITIES)

        assert player.attributes.health == 4
        assert player.attributes.abilities == 1
        assert player.max_health == 5000
        assert unspent_attribute_points(player) == 0

    def test_secondary_attribute_rejected(self):
        player = create_player("Hero", "Mage 1")
        award_experience(player, 50)
        with pytest.raises(UnsupportedAttributeError):
            allocate_attribute_points(player, Attribute.MANA)

    def test_not_enough_points(self):
        player = create_player("Hero", "Mage 1")
        award_experience(player, 50)
        with pytest.raises(ValueError):
            allocate_attribute_points(player, Attribute.SPECIAL, 3)
        assert player.attributes.special == 1

    @pytest.mark.parametrize("points", [0, -2])
    def test_points_must_be_positive(self, points):
        player = create_player("Hero", "Mage 1")
        award_experience(player, 50)
        with pytest.raises(ValueError):
            allocate_attribute_points(player, Attribute.SPECIAL, points)

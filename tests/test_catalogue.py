"""Tests for the player action catalogue."""

import json

import pytest
from pydantic import ValidationError

import config
from engine.catalogue import (
    PLAYER_ACTION_TABLE,
    build_catalogue,
    find_action,
    get_catalogue,
    load_catalogue,
)
from models.actions import ActionKind, ActionSource


class TestBuiltInCatalogue:
    """Tests for the default action table."""

    def test_twelve_actions(self):
        catalogue = build_catalogue(PLAYER_ACTION_TABLE)
        assert len(catalogue) == 12
        assert list(catalogue)[0] == "Weak Hit"

    def test_all_player_authored(self):
        catalogue = build_catalogue(PLAYER_ACTION_TABLE)
        assert all(a.source == ActionSource.PLAYER for a in catalogue.values())

    def test_every_kind_present(self):
        kinds = {a.kind for a in build_catalogue(PLAYER_ACTION_TABLE).values()}
        assert kinds == set(ActionKind)

    def test_free_starting_actions(self):
        catalogue = build_catalogue(PLAYER_ACTION_TABLE)
        free = [a.name for a in catalogue.values() if a.mana_cost == 0]
        assert free == ["Weak Hit", "Weak Poison"]

    def test_sustained_healing(self):
        action = build_catalogue(PLAYER_ACTION_TABLE)["Sustained Healing"]
        assert action.is_multi_turn
        assert action.duration == 4
        assert action.mana_cost == 700
        assert action.required_ability_points == 8


class TestFindAction:
    """Tests for find_action()."""

    def test_case_insensitive(self):
        catalogue = build_catalogue(PLAYER_ACTION_TABLE)
        assert find_action("STRONG hit", catalogue).name == "Strong Hit"

    def test_missing(self):
        assert find_action("Fireball", build_catalogue(PLAYER_ACTION_TABLE)) is None


class TestLoadCatalogue:
    """Tests for loading a catalogue from JSON."""

    def _write(self, tmp_path, entries):
        path = tmp_path / "actions.json"
        path.write_text(json.dumps(entries))
        return path

    def test_load(self, tmp_path):
        path = self._write(tmp_path, [
            {"name": "Fireball", "kind": "hit", "effect": 700, "mana_cost": 250},
            {"name": "Ward", "kind": "protection", "effect": 0.25, "duration": 2, "source": "opponent"},
        ])

        catalogue = load_catalogue(str(path))

        assert list(catalogue) == ["Fireball", "Ward"]
        assert catalogue["Fireball"].mana_cost == 250
        assert catalogue["Ward"].source == ActionSource.PLAYER

    def test_invalid_entry(self, tmp_path):
        path = self._write(tmp_path, [{"name": "Broken", "kind": "teleport", "effect": 1}])
        with pytest.raises(ValidationError):
            load_catalogue(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_catalogue(str(tmp_path / "nope.json"))

    def test_configured_file_replaces_table(self, tmp_path, monkeypatch):
        path = self._write(tmp_path, [{"name": "Fireball", "kind": "hit", "effect": 700}])
        monkeypatch.setattr(config, "ACTION_CATALOGUE_FILE", str(path))
        assert list(get_catalogue()) == ["Fireball"]

    def test_default_table(self, monkeypatch):
        monkeypatch.setattr(config, "ACTION_CATALOGUE_FILE", None)
        assert len(get_catalogue()) == 12

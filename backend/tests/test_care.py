"""
PetPal Backend — Care-Action Engine Unit Tests
================================================

What:  Tests for apply_care_action (pure function, no database).

What we test:
    ✅ feed / play / rest deltas from the default stats
    ✅ Clamping at both ends of [0, 100]
    ✅ Unknown actions leave stats unchanged
    ✅ Input stats are never mutated
    ✅ Results stay in range for every action from any starting point
"""

import itertools

import pytest

from petpal.schemas.pet import PetStats
from petpal.services.care import CARE_ACTIONS, apply_care_action, clamp_stat


class TestCareTransitions:
    """Deltas applied from the default 50/50/50 stats."""

    def test_feed_from_defaults(self):
        result = apply_care_action(PetStats(), "feed")
        assert result == PetStats(hunger=80, happiness=50, energy=60)

    def test_play_from_defaults(self):
        result = apply_care_action(PetStats(), "play")
        assert result == PetStats(hunger=50, happiness=80, energy=30)

    def test_rest_from_defaults(self):
        result = apply_care_action(PetStats(), "rest")
        assert result == PetStats(hunger=40, happiness=50, energy=90)

    def test_actions_listed_in_order(self):
        assert CARE_ACTIONS == ("feed", "play", "rest")


class TestCareClamping:
    def test_feed_clamps_at_max(self):
        result = apply_care_action(PetStats(hunger=90, happiness=50, energy=95), "feed")
        assert result.hunger == 100
        assert result.energy == 100

    def test_play_clamps_energy_at_zero(self):
        result = apply_care_action(PetStats(hunger=50, happiness=50, energy=10), "play")
        assert result.energy == 0
        assert result.happiness == 80

    def test_rest_clamps_hunger_at_zero(self):
        result = apply_care_action(PetStats(hunger=5, happiness=50, energy=80), "rest")
        assert result.hunger == 0
        assert result.energy == 100

    def test_feed_at_full_hunger(self):
        result = apply_care_action(PetStats(hunger=100, happiness=50, energy=50), "feed")
        assert result.hunger == 100

    def test_feed_near_caps(self):
        result = apply_care_action(PetStats(hunger=80, happiness=33, energy=95), "feed")
        assert result == PetStats(hunger=100, happiness=33, energy=100)

    def test_play_near_caps(self):
        result = apply_care_action(PetStats(hunger=50, happiness=90, energy=15), "play")
        assert (result.happiness, result.energy) == (100, 0)

    def test_rest_near_caps(self):
        result = apply_care_action(PetStats(hunger=5, happiness=50, energy=70), "rest")
        assert (result.hunger, result.energy) == (0, 100)

    def test_repeated_feeding_saturates(self):
        stats = PetStats()
        for _ in range(10):
            stats = apply_care_action(stats, "feed")
        assert stats.hunger == 100
        assert stats.energy == 100

    @pytest.mark.parametrize("value,expected", [(-5, 0), (0, 0), (42, 42), (100, 100), (130, 100)])
    def test_clamp_stat(self, value, expected):
        assert clamp_stat(value) == expected

    def test_every_action_stays_in_range(self):
        edges = (0, 1, 50, 99, 100)
        for hunger, happiness, energy in itertools.product(edges, repeat=3):
            start = PetStats(hunger=hunger, happiness=happiness, energy=energy)
            for action in CARE_ACTIONS:
                result = apply_care_action(start, action)
                for value in (result.hunger, result.happiness, result.energy):
                    assert 0 <= value <= 100


class TestUnknownActions:
    @pytest.mark.parametrize("action", ["dance", "", "FEED", "sleep"])
    def test_unknown_action_is_noop(self, action):
        start = PetStats(hunger=12, happiness=34, energy=56)
        assert apply_care_action(start, action) == start

    def test_input_not_mutated(self):
        start = PetStats(hunger=10, happiness=20, energy=30)
        apply_care_action(start, "feed")
        assert start == PetStats(hunger=10, happiness=20, energy=30)

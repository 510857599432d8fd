"""
PetPal Backend — Care-Action Engine
=====================================

What:  Pure transition function: (stats, action) → new stats.
Who:   Called by PetService.care_for_pet; tested directly.

Transition table:
    action │ hunger │ happiness │ energy
    ───────┼────────┼───────────┼───────
    feed   │  +30   │     0     │  +10
    play   │    0   │   +30     │  -20
    rest   │  -10   │     0     │  +40
    other  │    0   │     0     │    0

Every result is clamped to [0, 100]. Unknown actions are a no-op, not an error.
"""

from typing import Dict, Mapping

from petpal.schemas.pet import PetStats

STAT_MIN = 0
STAT_MAX = 100

CARE_EFFECTS: Mapping[str, Dict[str, int]] = {
    "feed": {"hunger": 30, "energy": 10},
    "play": {"happiness": 30, "energy": -20},
    "rest": {"hunger": -10, "energy": 40},
}

CARE_ACTIONS = tuple(CARE_EFFECTS)


def clamp_stat(value: int) -> int:
    return max(STAT_MIN, min(STAT_MAX, value))


def apply_care_action(stats: PetStats, action: str) -> PetStats:
    """
    Return the stats after performing `action`.

    The input is never mutated. An unrecognized action returns stats equal
    to the input.
    """
    effects = CARE_EFFECTS.get(action)
    if not effects:
        return stats
    updated = {
        name: clamp_stat(getattr(stats, name) + delta)
        for name, delta in effects.items()
    }
    return stats.model_copy(update=updated)

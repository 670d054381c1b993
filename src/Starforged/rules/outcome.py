"""Outcome tiers for action and progress rolls.

A score is compared against the two challenge dice. Beating neither is a miss,
beating one is a weak hit, beating both is a strong hit. A tie does not beat
the die. Matching challenge dice are reported separately from the tier.
"""

from __future__ import annotations

from enum import Enum


class Outcome(Enum):
    MISS = "Miss"
    WEAK_HIT = "Weak Hit"
    STRONG_HIT = "Strong Hit"

    @property
    def label(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


_TIERS = (Outcome.MISS, Outcome.WEAK_HIT, Outcome.STRONG_HIT)


def classify(score: int, first: int, second: int) -> Outcome:
    """Return the outcome tier of ``score`` against two challenge dice."""
    higher_than = (score > first) + (score > second)
    return _TIERS[higher_than]


def is_match(first: int, second: int) -> bool:
    return first == second

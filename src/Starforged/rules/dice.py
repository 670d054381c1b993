# rules/dice.py

from __future__ import annotations

import random
from typing import Protocol

import structlog

from .types import ActionRoll, CustomRoll, OracleRoll, ProgressRoll, RolledDie, RollSpec

ACTION_DIE = 6
CHALLENGE_DIE = 10
ORACLE_DIE = 100
MAX_ORACLE_DRAWS = 255


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


class DiceRNG:
    """Evaluates rolls against a random source.

    Pass ``seed`` for reproducible rolls, or ``rng`` to supply any object with
    ``randint`` (tests use scripted sources).
    """

    def __init__(self, seed: int | None = None, *, rng: RandomSource | None = None):
        self._rng: RandomSource = rng if rng is not None else random.Random(seed)
        self._log = structlog.get_logger()

    def _challenge_dice(self) -> tuple[int, int]:
        return (
            self._rng.randint(1, CHALLENGE_DIE),
            self._rng.randint(1, CHALLENGE_DIE),
        )

    def evaluate_custom(self, spec: RollSpec) -> CustomRoll:
        """Roll every die in ``spec`` and sum its bonuses.

        The spec must already be validated; a 0-sided die is a caller bug.
        """
        if 0 in spec.dice:
            raise ValueError("cannot roll a 0-sided die; validate the spec first")
        rolled = [RolledDie(size, self._rng.randint(1, size)) for size in spec.dice]
        # sorted() is stable, so equal sizes keep draw order
        rolled = sorted(rolled, key=lambda r: r.size, reverse=True)
        out = CustomRoll(rolls=tuple(rolled), bonus=sum(spec.bonuses))
        self._log.debug(
            "rules.dice.custom.result",
            dice=list(spec.dice),
            rolls=[r.value for r in out.rolls],
            bonus=out.bonus,
            total=out.total,
        )
        return out

    def evaluate_action(self, bonus: int | None = None) -> ActionRoll:
        action_die = self._rng.randint(1, ACTION_DIE)
        out = ActionRoll(action_die=action_die, bonus=bonus, challenge_dice=self._challenge_dice())
        self._log.debug(
            "rules.dice.action.result",
            action_die=out.action_die,
            bonus=out.bonus,
            challenge_dice=list(out.challenge_dice),
        )
        return out

    def evaluate_progress(self, progress: int | None = None) -> ProgressRoll:
        out = ProgressRoll(progress=progress, challenge_dice=self._challenge_dice())
        self._log.debug(
            "rules.dice.progress.result",
            progress=out.progress,
            challenge_dice=list(out.challenge_dice),
        )
        return out

    def evaluate_oracle(self, count: int = 1) -> OracleRoll:
        if not 1 <= count <= MAX_ORACLE_DRAWS:
            raise ValueError(f"oracle draw count must be 1..{MAX_ORACLE_DRAWS}, got {count}")
        out = OracleRoll(values=tuple(self._rng.randint(1, ORACLE_DIE) for _ in range(count)))
        self._log.debug("rules.dice.oracle.result", values=list(out.values))
        return out


# Process-wide generator for callers that don't inject their own.
default_rng = DiceRNG()


def evaluate_custom(spec: RollSpec) -> CustomRoll:
    return default_rng.evaluate_custom(spec)


def evaluate_action(bonus: int | None = None) -> ActionRoll:
    return default_rng.evaluate_action(bonus)


def evaluate_progress(progress: int | None = None) -> ProgressRoll:
    return default_rng.evaluate_progress(progress)


def evaluate_oracle(count: int = 1) -> OracleRoll:
    return default_rng.evaluate_oracle(count)

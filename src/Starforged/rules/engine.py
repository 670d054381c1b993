from typing import Protocol

from .dice import DiceRNG, default_rng
from .notation import parse_and_validate
from .render import render
from .types import ActionRoll, CustomRoll, OracleRoll, ProgressRoll


class Ruleset(Protocol):
    """
    What command handlers need from the dice engine: evaluate a roll and
    turn it into display text.
    """
    def roll_custom(self, notation: str) -> CustomRoll:
        ...

    def roll_action(self, bonus: int | None = None) -> ActionRoll:
        ...

    def roll_progress(self, progress: int | None = None) -> ProgressRoll:
        ...

    def roll_oracle(self, count: int = 1) -> OracleRoll:
        ...

    def describe(self, roll: ActionRoll | ProgressRoll | OracleRoll | CustomRoll) -> str:
        ...


class StarforgedRuleset:
    """
    Ironsworn: Starforged rolls on top of DiceRNG.
    """
    def __init__(self, seed: int | None = None, *, rng: DiceRNG | None = None):
        if rng is not None:
            self.rng = rng
        elif seed is not None:
            self.rng = DiceRNG(seed)
        else:
            self.rng = default_rng

    def roll_custom(self, notation: str) -> CustomRoll:
        # Raises NotationError subclasses for bad input
        return self.rng.evaluate_custom(parse_and_validate(notation))

    def roll_action(self, bonus: int | None = None) -> ActionRoll:
        return self.rng.evaluate_action(bonus)

    def roll_progress(self, progress: int | None = None) -> ProgressRoll:
        return self.rng.evaluate_progress(progress)

    def roll_oracle(self, count: int = 1) -> OracleRoll:
        return self.rng.evaluate_oracle(count)

    def describe(self, roll: ActionRoll | ProgressRoll | OracleRoll | CustomRoll) -> str:
        return render(roll)

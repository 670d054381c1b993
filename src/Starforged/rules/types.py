from __future__ import annotations

from dataclasses import dataclass

from .outcome import Outcome, classify, is_match

# Action and progress scores never exceed this.
MAX_SCORE = 10


@dataclass(frozen=True)
class RollSpec:
    dice: tuple[int, ...]
    bonuses: tuple[int, ...] = ()


@dataclass(frozen=True)
class RolledDie:
    size: int
    value: int


@dataclass(frozen=True)
class CustomRoll:
    """Result of a custom roll.

    ``rolls`` is sorted by descending die size (stable); the renderer relies on it.
    """

    rolls: tuple[RolledDie, ...]
    bonus: int = 0

    @property
    def total(self) -> int:
        return sum(r.value for r in self.rolls) + self.bonus

    @property
    def groups(self) -> list[tuple[int, int]]:
        """Run-length ``(count, size)`` pairs over the sorted rolls."""
        out: list[tuple[int, int]] = []
        for r in self.rolls:
            if out and out[-1][1] == r.size:
                out[-1] = (out[-1][0] + 1, r.size)
            else:
                out.append((1, r.size))
        return out


@dataclass(frozen=True)
class ActionRoll:
    action_die: int
    bonus: int | None
    challenge_dice: tuple[int, int]

    @property
    def score(self) -> int | None:
        # Only known if the bonus is known
        if self.bonus is None:
            return None
        return min(self.action_die + self.bonus, MAX_SCORE)

    @property
    def outcome(self) -> Outcome | None:
        score = self.score
        if score is None:
            return None
        return classify(score, *self.challenge_dice)

    @property
    def is_match(self) -> bool:
        return is_match(*self.challenge_dice)


@dataclass(frozen=True)
class ProgressRoll:
    progress: int | None
    challenge_dice: tuple[int, int]

    @property
    def score(self) -> int | None:
        if self.progress is None:
            return None
        return min(self.progress, MAX_SCORE)

    @property
    def outcome(self) -> Outcome | None:
        score = self.score
        if score is None:
            return None
        return classify(score, *self.challenge_dice)

    @property
    def is_match(self) -> bool:
        return is_match(*self.challenge_dice)


@dataclass(frozen=True)
class OracleRoll:
    values: tuple[int, ...]


__all__ = [
    "MAX_SCORE",
    "ActionRoll",
    "CustomRoll",
    "OracleRoll",
    "Outcome",
    "ProgressRoll",
    "RollSpec",
    "RolledDie",
]

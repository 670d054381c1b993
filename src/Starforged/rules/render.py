"""Display strings for finished rolls.

Every function here is a pure projection of a roll; nothing is recomputed
except the derived score/outcome properties on the roll itself.
"""

from __future__ import annotations

from functools import singledispatch

from .types import ActionRoll, CustomRoll, OracleRoll, ProgressRoll


def _challenge(dice: tuple[int, int]) -> str:
    return f"[{dice[0]}] [{dice[1]}]"


def _tier(roll: ActionRoll | ProgressRoll) -> str:
    matched = "Matched " if roll.is_match else ""
    return f"({matched}{roll.outcome})"


def render_action(roll: ActionRoll) -> str:
    if roll.bonus is None:
        suffix = " (Match)" if roll.is_match else ""
        return f"Action Roll: [{roll.action_die}] vs {_challenge(roll.challenge_dice)}{suffix}"
    return (
        f"Action Roll: [{roll.action_die}]+{roll.bonus} = {roll.score} "
        f"vs {_challenge(roll.challenge_dice)} {_tier(roll)}"
    )


def render_progress(roll: ProgressRoll) -> str:
    if roll.progress is None:
        suffix = " (Match)" if roll.is_match else ""
        return f"Progress Roll: {_challenge(roll.challenge_dice)}{suffix}"
    return f"Progress Roll: {roll.score} vs {_challenge(roll.challenge_dice)} {_tier(roll)}"


def render_oracle(roll: OracleRoll) -> str:
    return "Oracle Roll: " + " ".join(f"[{v}]" for v in roll.values)


def render_custom(roll: CustomRoll) -> str:
    """Render a custom roll, e.g. ``Custom Roll (2d6 + 3): [4] [1] + 3 Total: 8``.

    Assumes ``roll.rolls`` is sorted by descending size so equal sizes are
    adjacent.
    """
    terms = [f"{count}d{size}" for count, size in roll.groups]
    values = " ".join(f"[{r.value}]" for r in roll.rolls)
    if roll.bonus:
        terms.append(str(roll.bonus))
        values += f" + {roll.bonus}"
    out = f"Custom Roll ({' + '.join(terms)}): {values}"
    contributing = len(roll.rolls) + (1 if roll.bonus else 0)
    if contributing > 1:
        out += f" Total: {roll.total}"
    return out


@singledispatch
def render(roll) -> str:
    raise TypeError(f"don't know how to render {type(roll).__name__}")


render.register(ActionRoll, render_action)
render.register(ProgressRoll, render_progress)
render.register(OracleRoll, render_oracle)
render.register(CustomRoll, render_custom)

import random

import pytest

from Starforged.rules import dice as dice_mod
from Starforged.rules.dice import DiceRNG
from Starforged.rules.notation import parse
from Starforged.rules.outcome import Outcome
from Starforged.rules.types import RolledDie, RollSpec


def test_custom_sorts_by_size_descending_and_sums_bonuses(scripted):
    src = scripted([3, 5, 2])
    res = DiceRNG(rng=src).evaluate_custom(RollSpec(dice=(4, 6, 6), bonuses=(1, 2)))
    # One draw per die, in spec order, each against its own size
    assert src.calls == [(1, 4), (1, 6), (1, 6)]
    assert res.rolls == (RolledDie(6, 5), RolledDie(6, 2), RolledDie(4, 3))
    assert res.bonus == 3
    assert res.total == 13


def test_custom_sort_is_stable_for_equal_sizes(scripted):
    src = scripted([1, 7, 2, 3])
    res = DiceRNG(rng=src).evaluate_custom(RollSpec(dice=(8, 10, 8, 8)))
    assert [r.value for r in res.rolls] == [7, 1, 2, 3]


def test_custom_refuses_zero_sided_die():
    with pytest.raises(ValueError):
        DiceRNG(seed=1).evaluate_custom(RollSpec(dice=(6, 0)))


def test_custom_values_within_faces_seeded():
    rng = DiceRNG(seed=1234)
    spec = parse("10d4 + 5d20 + 3d100 + 7")
    for _ in range(50):
        res = rng.evaluate_custom(spec)
        assert len(res.rolls) == 18
        assert all(1 <= r.value <= r.size for r in res.rolls)
        assert res.bonus == 7


def test_same_seed_same_rolls():
    spec = parse("4d6 + 2d8")
    a = DiceRNG(seed=99).evaluate_custom(spec)
    b = DiceRNG(seed=99).evaluate_custom(spec)
    assert a == b


def test_accepts_random_instance_as_source():
    res = DiceRNG(rng=random.Random(5)).evaluate_oracle(3)
    assert len(res.values) == 3


def test_action_draw_order_and_ranges(scripted):
    src = scripted([4, 3, 8])
    res = DiceRNG(rng=src).evaluate_action(3)
    assert src.calls == [(1, 6), (1, 10), (1, 10)]
    assert res.action_die == 4
    assert res.challenge_dice == (3, 8)
    assert res.score == 7
    assert res.outcome is Outcome.WEAK_HIT


def test_action_score_clamps_at_ten(scripted):
    res = DiceRNG(rng=scripted([6, 9, 10])).evaluate_action(255)
    assert res.score == 10
    # 10 beats 9 but ties 10
    assert res.outcome is Outcome.WEAK_HIT


def test_action_without_bonus_has_no_score(scripted):
    res = DiceRNG(rng=scripted([2, 5, 5])).evaluate_action(None)
    assert res.bonus is None
    assert res.score is None
    assert res.outcome is None
    assert res.is_match


def test_action_zero_bonus_is_not_unknown(scripted):
    res = DiceRNG(rng=scripted([2, 1, 1])).evaluate_action(0)
    assert res.score == 2
    assert res.outcome is Outcome.STRONG_HIT


def test_progress_clamps_and_classifies(scripted):
    src = scripted([9, 10])
    res = DiceRNG(rng=src).evaluate_progress(12)
    assert src.calls == [(1, 10), (1, 10)]
    assert res.score == 10
    assert res.outcome is Outcome.WEAK_HIT


def test_progress_without_value_has_no_outcome(scripted):
    res = DiceRNG(rng=scripted([1, 2])).evaluate_progress()
    assert res.score is None
    assert res.outcome is None
    assert not res.is_match


def test_oracle_preserves_draw_order(scripted):
    src = scripted([88, 3, 100])
    res = DiceRNG(rng=src).evaluate_oracle(3)
    assert src.calls == [(1, 100)] * 3
    assert res.values == (88, 3, 100)


@pytest.mark.parametrize("count", [0, 256, -1])
def test_oracle_count_bounds(count):
    with pytest.raises(ValueError):
        DiceRNG(seed=1).evaluate_oracle(count)


def test_module_helpers_use_shared_generator(monkeypatch, scripted):
    monkeypatch.setattr(dice_mod, "default_rng", DiceRNG(rng=scripted([42])))
    assert dice_mod.evaluate_oracle().values == (42,)

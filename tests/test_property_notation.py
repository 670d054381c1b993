from hypothesis import given
from hypothesis import strategies as st

from Starforged.rules.dice import DiceRNG
from Starforged.rules.notation import parse, parse_and_validate
from Starforged.rules.render import render_custom

dice_term = st.tuples(st.integers(min_value=1, max_value=12), st.integers(min_value=1, max_value=100))
bonus_term = st.integers(min_value=0, max_value=255)
term = st.one_of(dice_term, bonus_term)
spacing = st.sampled_from(["", " ", "  ", "\t"])


def _render_term(t, upper: bool) -> str:
    if isinstance(t, tuple):
        count, size = t
        return f"{count}{'D' if upper else 'd'}{size}"
    return str(t)


@st.composite
def notation(draw):
    terms = draw(st.lists(term, min_size=0, max_size=6))
    terms.insert(draw(st.integers(min_value=0, max_value=len(terms))), draw(dice_term))
    upper = draw(st.booleans())
    pieces = []
    for i, t in enumerate(terms):
        if i:
            pieces.append(draw(spacing) + "+" + draw(spacing))
        pieces.append(_render_term(t, upper))
    text = draw(spacing) + "".join(pieces) + draw(spacing)
    return text, terms


@given(notation(), st.integers(min_value=0, max_value=2**32))
def test_valid_notation_always_rolls_in_range(case, seed):
    text, terms = case
    spec = parse_and_validate(text)

    expected_dice = []
    expected_bonuses = []
    for t in terms:
        if isinstance(t, tuple):
            expected_dice.extend([t[1]] * t[0])
        else:
            expected_bonuses.append(t)
    assert list(spec.dice) == expected_dice
    assert list(spec.bonuses) == expected_bonuses

    res = DiceRNG(seed=seed).evaluate_custom(spec)
    assert len(res.rolls) == len(spec.dice)
    assert all(1 <= r.value <= r.size for r in res.rolls)
    sizes = [r.size for r in res.rolls]
    assert sizes == sorted(sizes, reverse=True)
    assert sum(c for c, _ in res.groups) == len(res.rolls)
    assert res.bonus == sum(expected_bonuses)
    assert render_custom(res).startswith("Custom Roll (")


@given(st.text(max_size=30))
def test_parse_never_raises_anything_but_value_error(text):
    try:
        parse(text)
    except ValueError:
        pass

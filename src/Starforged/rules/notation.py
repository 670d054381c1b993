"""Lexer and parser for custom roll notation.

Notation is a ``+``-separated list of terms, each either a dice group
(``2d6``, ``d20``, ``3D8``) or a flat bonus (``4``). At least one dice group is
required. Whitespace between tokens is ignored; whitespace inside a token is
not (``2 d6`` and ``2d 6`` are errors).

Examples: ``1d20``, ``2d6+1d4+3``, ``1 + d4``.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from .errors import DegenerateSpecError, GrammarError, LexicalError
from .types import RollSpec

# Largest count, size or bonus a single token may carry.
MAX_LITERAL = 255
# Largest number of dice and bonus terms one spec may expand to: 255 groups of
# 255 dice, and 255 bonus terms.
MAX_DICE = MAX_LITERAL * MAX_LITERAL
MAX_BONUSES = 255

_TOKEN_RE = re.compile(
    r"(?P<ws>\s+)"
    r"|(?P<dice>(?P<count>\d*)[dD](?P<size>\d+))"
    r"|(?P<number>\d+)(?![\ddD])"
    r"|(?P<plus>\+)",
    re.ASCII,
)


class TokenKind(Enum):
    DICE = "dice"
    NUMBER = "number"
    PLUS = "plus"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    position: int
    count: int = 0
    size: int = 0
    value: int = 0


def _literal(digits: str, text: str, position: int) -> int:
    # Leading zeros are harmless; anything longer than three digits is out of range
    # and never handed to int().
    stripped = digits.lstrip("0") or "0"
    if len(stripped) > 3 or int(stripped) > MAX_LITERAL:
        raise LexicalError(
            f"number {digits} at position {position} is larger than {MAX_LITERAL}",
            text=text,
            position=position,
        )
    return int(stripped)


def tokenize(text: str) -> Iterator[Token]:
    """Yield tokens from ``text`` lazily.

    Raises LexicalError when the scan reaches something it can't recognize.
    """
    pos = 0
    end = len(text)
    while pos < end:
        m = _TOKEN_RE.match(text, pos)
        if m is None:
            raise LexicalError(
                f"unexpected {text[pos]!r} at position {pos}", text=text, position=pos
            )
        kind = m.lastgroup
        if kind == "dice":
            count_digits = m.group("count")
            count = _literal(count_digits, text, pos) if count_digits else 1
            size = _literal(m.group("size"), text, m.start("size"))
            yield Token(TokenKind.DICE, pos, count=count, size=size)
        elif kind == "number":
            yield Token(TokenKind.NUMBER, pos, value=_literal(m.group("number"), text, pos))
        elif kind == "plus":
            yield Token(TokenKind.PLUS, pos)
        pos = m.end()


def parse(text: str) -> RollSpec:
    """Parse notation into a RollSpec.

    Dice and bonuses each keep their input order. Raises LexicalError or
    GrammarError; never returns a partial spec.
    """
    tokens = tokenize(text)
    dice: list[int] = []
    bonuses: list[int] = []
    after_plus = False

    while True:
        tok = next(tokens, None)
        if tok is None:
            if after_plus:
                raise GrammarError("roll ends with a dangling '+'", text=text)
            raise GrammarError("roll is empty", text=text)
        if tok.kind is TokenKind.DICE:
            dice.extend([tok.size] * tok.count)
        elif tok.kind is TokenKind.NUMBER:
            bonuses.append(tok.value)
        else:
            raise GrammarError(
                f"expected dice or a number at position {tok.position}, got '+'",
                text=text,
                position=tok.position,
            )

        sep = next(tokens, None)
        if sep is None:
            break
        if sep.kind is not TokenKind.PLUS:
            raise GrammarError(
                f"missing '+' before position {sep.position}",
                text=text,
                position=sep.position,
            )
        after_plus = True

    if not dice:
        raise GrammarError("roll needs at least one die, e.g. 1d6", text=text)
    return RollSpec(dice=tuple(dice), bonuses=tuple(bonuses))


def validate_spec(spec: RollSpec, *, text: str = "") -> RollSpec:
    """Reject specs that parse but can't be rolled."""
    if 0 in spec.dice:
        raise DegenerateSpecError("dice must have at least one side", text=text)
    if len(spec.dice) > MAX_DICE:
        raise DegenerateSpecError(
            f"too many dice: {len(spec.dice)} (max {MAX_DICE})", text=text
        )
    if len(spec.bonuses) > MAX_BONUSES:
        raise DegenerateSpecError(
            f"too many bonuses: {len(spec.bonuses)} (max {MAX_BONUSES})", text=text
        )
    return spec


def parse_and_validate(text: str) -> RollSpec:
    return validate_spec(parse(text), text=text)

"""Dice notation parsing, roll evaluation and rendering."""

from .dice import (
    DiceRNG,
    default_rng,
    evaluate_action,
    evaluate_custom,
    evaluate_oracle,
    evaluate_progress,
)
from .engine import Ruleset, StarforgedRuleset
from .errors import DegenerateSpecError, GrammarError, LexicalError, NotationError
from .notation import Token, TokenKind, parse, parse_and_validate, tokenize, validate_spec
from .outcome import Outcome, classify, is_match
from .render import render, render_action, render_custom, render_oracle, render_progress
from .types import ActionRoll, CustomRoll, OracleRoll, ProgressRoll, RolledDie, RollSpec

__all__ = [
    "ActionRoll",
    "CustomRoll",
    "DegenerateSpecError",
    "DiceRNG",
    "GrammarError",
    "LexicalError",
    "NotationError",
    "OracleRoll",
    "Outcome",
    "ProgressRoll",
    "RollSpec",
    "RolledDie",
    "Ruleset",
    "StarforgedRuleset",
    "Token",
    "TokenKind",
    "classify",
    "default_rng",
    "evaluate_action",
    "evaluate_custom",
    "evaluate_oracle",
    "evaluate_progress",
    "is_match",
    "parse",
    "parse_and_validate",
    "render",
    "render_action",
    "render_custom",
    "render_oracle",
    "render_progress",
    "tokenize",
    "validate_spec",
]

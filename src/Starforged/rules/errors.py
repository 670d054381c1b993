# rules/errors.py
from __future__ import annotations


class NotationError(ValueError):
    """Base for every failure to turn dice notation into a rollable spec."""

    def __init__(self, message: str, *, text: str = "", position: int | None = None):
        super().__init__(message)
        self.message = message
        self.text = text
        self.position = position


class LexicalError(NotationError):
    """Unrecognized character, or a number outside 0..255."""


class GrammarError(NotationError):
    """Tokens were fine but the terms and separators don't fit together."""


class DegenerateSpecError(NotationError):
    """Parsed, but not something we can roll (0-sided die, too many dice)."""

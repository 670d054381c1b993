# src/Starforged/commanding.py
from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, ClassVar, Protocol

from pydantic import BaseModel, ConfigDict


# --- Transport-agnostic context the handler receives ---
class Responder(Protocol):
    async def send(self, content: str, *, ephemeral: bool = False) -> None: ...

    async def delete_trigger(self) -> None: ...


@dataclass
class Invocation:
    name: str
    options: dict[str, Any]
    user_id: str
    channel_id: str | None
    responder: Responder
    # Optional DI: settings and ruleset for handlers that need them
    settings: Any | None = None
    ruleset: Any | None = None


# --- Option models: fields bind to positional arguments in declaration order ---
class Option(BaseModel):
    """Base for command options; extend per command."""

    model_config = ConfigDict(extra="forbid")

    # Name of a str field that takes all remaining arguments joined by spaces
    greedy: ClassVar[str | None] = None


# --- Command descriptor ---
@dataclass
class Command:
    name: str
    description: str
    option_model: type[Option]
    handler: Callable[[Invocation, Option], Awaitable[None]]
    usage: str = ""


# --- Global registry (populated by decorator) ---
_REGISTRY: dict[str, Command] = {}
# Rulesets built from settings, keyed by seed (None shares the process generator)
_SEEDED: dict[int | None, Any] = {}


def slash_command(
    name: str,
    description: str,
    option_model: type[Option] = Option,
    usage: str = "",
):
    def wrap(func: Callable[[Invocation, Option], Awaitable[None]]):
        _REGISTRY[name.lower()] = Command(name, description, option_model, func, usage)
        return func
    return wrap


def all_commands() -> dict[str, Command]:
    return dict(_REGISTRY)


def find_command(name: str) -> Command | None:
    return _REGISTRY.get(name.lower())


def seeded_ruleset(seed: int | None):
    """One ruleset per seed for the life of the process.

    Rolls after the first continue the seeded sequence instead of replaying it.
    """
    if seed not in _SEEDED:
        from Starforged.rules.engine import StarforgedRuleset

        _SEEDED[seed] = StarforgedRuleset(seed=seed)
    return _SEEDED[seed]


def reset_seeded_rulesets() -> None:
    _SEEDED.clear()


def resolve_ruleset(inv: Invocation):
    """Prefer the injected ruleset; otherwise the shared one for the configured seed."""
    if inv.ruleset is None:
        inv.ruleset = seeded_ruleset(getattr(inv.settings, "rng_seed", None))
    return inv.ruleset


def emphasize(inv: Invocation, text: str) -> str:
    if getattr(inv.settings, "emphasize_replies", True):
        return f"***{text}***"
    return text

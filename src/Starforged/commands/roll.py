# src/Starforged/commands/roll.py
from typing import ClassVar

import structlog
from pydantic import Field

from Starforged.commanding import Invocation, Option, emphasize, resolve_ruleset, slash_command
from Starforged.metrics import inc_counter
from Starforged.rules.errors import NotationError

log = structlog.get_logger()


class RollOpts(Option):
    greedy: ClassVar[str | None] = "notation"

    notation: str = Field(min_length=1, description="Dice notation, e.g. 2d6+1d4+3")


@slash_command(
    name="roll",
    description="Custom roll from dice notation (e.g. 2d6+1d4+3).",
    option_model=RollOpts,
    usage="roll <notation>",
)
async def roll(inv: Invocation, opts: RollOpts):
    rs = resolve_ruleset(inv)
    try:
        res = rs.roll_custom(opts.notation)
    except NotationError as err:
        inc_counter("command.roll.parse_failed")
        log.warning(
            "command.roll.parse_failed",
            notation=opts.notation,
            error_type=type(err).__name__,
            reason=err.message,
        )
        await inv.responder.send(f'Could not parse roll "{opts.notation}": {err.message}')
        return

    inc_counter("command.roll.ok")
    await inv.responder.send(emphasize(inv, rs.describe(res)))

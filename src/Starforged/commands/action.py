# src/Starforged/commands/action.py
import structlog
from pydantic import Field

from Starforged.commanding import Invocation, Option, emphasize, resolve_ruleset, slash_command
from Starforged.metrics import inc_counter

log = structlog.get_logger()


class ActionOpts(Option):
    bonus: int | None = Field(
        default=None,
        ge=0,
        le=255,
        description="Stat plus adds; omit to roll without scoring",
    )


@slash_command(
    name="action",
    description="Action roll: d6 + bonus against two challenge dice.",
    option_model=ActionOpts,
    usage="action [bonus]",
)
async def action(inv: Invocation, opts: ActionOpts):
    rs = resolve_ruleset(inv)
    res = rs.roll_action(opts.bonus)
    log.info(
        "command.action.rolled",
        bonus=opts.bonus,
        score=res.score,
        outcome=res.outcome.label if res.outcome else None,
        match=res.is_match,
    )
    inc_counter("command.action.ok")
    await inv.responder.send(emphasize(inv, rs.describe(res)))

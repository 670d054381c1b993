import structlog
from pydantic import Field

from Starforged.commanding import Invocation, Option, emphasize, resolve_ruleset, slash_command
from Starforged.metrics import inc_counter

log = structlog.get_logger()


class ProgressOpts(Option):
    progress: int | None = Field(
        default=None,
        ge=0,
        le=255,
        description="Filled progress boxes (scores above 10 count as 10)",
    )


@slash_command(
    name="progress",
    description="Progress roll: progress score against two challenge dice.",
    option_model=ProgressOpts,
    usage="progress [score]",
)
async def progress(inv: Invocation, opts: ProgressOpts):
    rs = resolve_ruleset(inv)
    res = rs.roll_progress(opts.progress)
    log.info(
        "command.progress.rolled",
        progress=opts.progress,
        outcome=res.outcome.label if res.outcome else None,
        match=res.is_match,
    )
    inc_counter("command.progress.ok")
    await inv.responder.send(emphasize(inv, rs.describe(res)))

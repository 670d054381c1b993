from pydantic import Field

from Starforged.commanding import Invocation, Option, emphasize, resolve_ruleset, slash_command
from Starforged.metrics import inc_counter


class OracleOpts(Option):
    count: int = Field(default=1, ge=1, le=255, description="How many d100 draws")


@slash_command(
    name="oracle",
    description="Oracle roll: one or more d100 draws.",
    option_model=OracleOpts,
    usage="oracle [count]",
)
async def oracle(inv: Invocation, opts: OracleOpts):
    rs = resolve_ruleset(inv)
    res = rs.roll_oracle(opts.count)
    inc_counter("command.oracle.ok")
    await inv.responder.send(emphasize(inv, rs.describe(res)))

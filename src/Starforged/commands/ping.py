from Starforged.commanding import Invocation, Option, slash_command
from Starforged.metrics import inc_counter


@slash_command(name="ping", description="Check that the bot is listening.")
async def ping(inv: Invocation, opts: Option):
    inc_counter("command.ping.ok")
    await inv.responder.send("Pong!")

from __future__ import annotations

from Starforged.commanding import Invocation, Option, all_commands, slash_command
from Starforged.metrics import inc_counter


def _build_help_text(prefix: str) -> str:
    lines = ["Starforged dice commands:"]
    for name, cmd in sorted(all_commands().items()):
        usage = cmd.usage or name
        lines.append(f"• {prefix}{usage}: {cmd.description}")
    return "\n".join(lines)


@slash_command(name="help", description="List available commands.")
async def help_cmd(inv: Invocation, opts: Option):
    inc_counter("command.help.ok")
    prefix = getattr(inv.settings, "command_prefix", "/")
    await inv.responder.send(_build_help_text(prefix), ephemeral=True)

"""
Console transport: type chat messages, get the bot's replies.

Examples:
  starforged say "/action 3"
  starforged say "/roll 2d6+1d4+3"
  echo "/oracle 2" | starforged repl

This does not talk to any chat service. Each message goes through the same
dispatcher a network transport would use, with a PrintResponder standing in
for the channel.
"""
from __future__ import annotations

import asyncio

import click
import structlog

from Starforged.command_loader import load_all_commands
from Starforged.commanding import all_commands
from Starforged.config import Settings, load_settings
from Starforged.dispatcher import dispatch
from Starforged.logging import redact_settings, setup_logging
from Starforged.rules.engine import StarforgedRuleset

log = structlog.get_logger()


class PrintResponder:
    async def send(self, content: str, *, ephemeral: bool = False) -> None:
        prefix = "(ephemeral) " if ephemeral else ""
        click.echo(prefix + str(content))

    async def delete_trigger(self) -> None:
        # Nothing to delete on a terminal
        log.debug("cli.delete_trigger.skipped")


def _bootstrap(seed: int | None) -> tuple[Settings, StarforgedRuleset]:
    overrides = {"rng_seed": seed} if seed is not None else {}
    settings = Settings(**overrides) if overrides else load_settings()
    setup_logging(settings)
    load_all_commands()
    log.info("cli.startup", config=redact_settings(settings))
    return settings, StarforgedRuleset(seed=settings.rng_seed)


async def _dispatch_one(text: str, settings: Settings, ruleset: StarforgedRuleset) -> bool:
    return await dispatch(
        text,
        PrintResponder(),
        settings=settings,
        ruleset=ruleset,
        user_id="console",
        channel_id="console",
    )


@click.group()
@click.option("--seed", type=int, default=None, help="Seed the dice for reproducible rolls.")
@click.pass_context
def cli(ctx: click.Context, seed: int | None) -> None:
    """Starforged dice bot, console edition."""
    ctx.ensure_object(dict)
    ctx.obj["seed"] = seed


@cli.command()
@click.argument("message")
@click.pass_context
def say(ctx: click.Context, message: str) -> None:
    """Dispatch one MESSAGE as if it were posted in chat."""
    settings, ruleset = _bootstrap(ctx.obj["seed"])
    handled = asyncio.run(_dispatch_one(message, settings, ruleset))
    if not handled:
        click.echo(
            f"Not a command. Try {settings.command_prefix}help.",
            err=True,
        )
        ctx.exit(1)


@cli.command()
@click.pass_context
def repl(ctx: click.Context) -> None:
    """Read messages from stdin, one per line, until EOF."""
    settings, ruleset = _bootstrap(ctx.obj["seed"])

    async def _loop() -> None:
        for line in click.get_text_stream("stdin"):
            line = line.rstrip("\n")
            if line.strip():
                await _dispatch_one(line, settings, ruleset)

    asyncio.run(_loop())


@cli.command(name="commands")
def list_commands() -> None:
    """List registered commands."""
    load_all_commands()
    for name, cmd in sorted(all_commands().items()):
        click.echo(f"{name}: {cmd.description}")


def main() -> None:  # pragma: no cover
    cli(obj={})


if __name__ == "__main__":  # pragma: no cover
    main()

"""Turn a raw chat message into a command invocation.

A message is a command when it starts with the configured prefix. The first
word after the prefix names the command; the remaining whitespace-separated
words bind, in order, to the fields of the command's option model.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog
from pydantic import ValidationError
from structlog.contextvars import bind_contextvars, unbind_contextvars

from Starforged.commanding import Command, Invocation, Option, Responder, find_command
from Starforged.config import Settings, load_settings
from Starforged.metrics import inc_counter

log = structlog.get_logger()


@dataclass(frozen=True)
class ParsedMessage:
    name: str
    args: list[str]


class OptionError(ValueError):
    def __init__(self, field: str | None, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        if field is None:
            msg = f'Unexpected argument "{value}"'
        elif value is None:
            msg = f"Missing {field}"
        else:
            msg = f'Invalid {field} "{value}": {reason}'
        super().__init__(msg)


def parse_message(text: str, prefix: str) -> ParsedMessage | None:
    """Split ``text`` into a command name and arguments, or None if it isn't one."""
    stripped = text.strip()
    if not prefix or not stripped.startswith(prefix):
        return None
    parts = stripped[len(prefix):].split()
    if not parts:
        return None
    return ParsedMessage(name=parts[0].lower(), args=parts[1:])


def bind_options(command: Command, args: list[str]) -> Option:
    """Bind positional ``args`` to the command's option model and validate them."""
    model = command.option_model
    greedy = model.greedy
    values: dict[str, Any] = {}
    rest = list(args)
    for name in model.model_fields:
        if not rest:
            break
        if name == greedy:
            values[name] = " ".join(rest)
            rest = []
        else:
            values[name] = rest.pop(0)
    if rest:
        raise OptionError(None, " ".join(rest), "too many arguments")

    try:
        return model.model_validate(values)
    except ValidationError as err:
        first = err.errors()[0]
        loc = first.get("loc") or ()
        field = str(loc[0]) if loc else None
        raise OptionError(field, values.get(field) if field else None, first["msg"]) from err


async def dispatch(
    text: str,
    responder: Responder,
    *,
    settings: Settings | None = None,
    ruleset: Any | None = None,
    user_id: str = "",
    channel_id: str | None = None,
) -> bool:
    """Run the command in ``text``, if any.

    Returns True when the message was addressed to a known command, whether or
    not it succeeded. Failures are answered through ``responder``.
    """
    settings = settings or load_settings()
    parsed = parse_message(text, settings.command_prefix)
    if parsed is None:
        return False
    cmd = find_command(parsed.name)
    if cmd is None:
        inc_counter("dispatch.unknown")
        log.debug("dispatch.unknown_command", command=parsed.name)
        return False

    inc_counter("dispatch.received")
    bind_contextvars(command=cmd.name, user_id=user_id, channel_id=channel_id)
    try:
        log.info("dispatch.received", args=parsed.args)

        if settings.delete_trigger_messages:
            try:
                await responder.delete_trigger()
            except Exception:
                # Missing permissions shouldn't stop the roll
                log.warning("dispatch.delete_trigger_failed", exc_info=True)

        if len(text) > settings.max_message_length:
            inc_counter("dispatch.option_error")
            log.warning("dispatch.message_too_long", length=len(text))
            await responder.send(
                f"Message too long ({len(text)} > {settings.max_message_length} characters)."
            )
            return True

        try:
            opts = bind_options(cmd, parsed.args)
        except OptionError as err:
            inc_counter("dispatch.option_error")
            log.warning("dispatch.option_error", field=err.field, value=err.value, reason=err.reason)
            await responder.send(f"{err} (usage: {settings.command_prefix}{cmd.usage or cmd.name})")
            return True

        inv = Invocation(
            name=cmd.name,
            options=opts.model_dump(),
            user_id=user_id,
            channel_id=channel_id,
            responder=responder,
            settings=settings,
            ruleset=ruleset,
        )
        try:
            await cmd.handler(inv, opts)
        except Exception:
            inc_counter("dispatch.handler_error")
            log.error("dispatch.handler_error", exc_info=True)
            await responder.send(f"Something went wrong running {settings.command_prefix}{cmd.name}.")
        return True
    finally:
        unbind_contextvars("command", "user_id", "channel_id")

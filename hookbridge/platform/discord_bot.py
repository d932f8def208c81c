"""Discord adapter: gateway client, interaction parsing and embed replies.

discord.py owns the gateway connection and runs every event handler as its
own task, so each ``/update`` invocation is handled independently of the
others.
"""

from __future__ import annotations

import logging
from typing import Any

import discord

from hookbridge.commands.catalog import UPDATE_COMMAND_NAME
from hookbridge.commands.dispatch import dispatch_update
from hookbridge.commands.router import CommandRouter
from hookbridge.core.errors import InvalidCommandError, ReplyChannelError
from hookbridge.core.types import CommandRequest, Requester, StatusMessage
from hookbridge.orchestrator.update import UpdateOrchestrator

logger = logging.getLogger(__name__)

# Discord embed limits; longer values make the whole edit fail with a 400
EMBED_TITLE_LIMIT = 256
EMBED_DESCRIPTION_LIMIT = 4096
EMBED_FIELD_NAME_LIMIT = 256
EMBED_FIELD_VALUE_LIMIT = 1024

TRUNCATION_MARKER = "…"

MALFORMED_UPDATE_MESSAGE = "Error: /update needs a table and a numeric record ID."


def _clip(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - len(TRUNCATION_MARKER)] + TRUNCATION_MARKER


def to_embed(message: StatusMessage) -> discord.Embed:
    """Render a StatusMessage as a Discord embed.

    Text longer than Discord's embed limits is truncated with a trailing
    ellipsis.
    """
    embed = discord.Embed(
        title=_clip(message.title, EMBED_TITLE_LIMIT),
        description=_clip(message.body, EMBED_DESCRIPTION_LIMIT),
        colour=message.color.rgb,
        timestamp=message.timestamp,
    )
    for name, value in message.fields:
        embed.add_field(
            name=_clip(name, EMBED_FIELD_NAME_LIMIT),
            value=_clip(value, EMBED_FIELD_VALUE_LIMIT),
            inline=True,
        )
    return embed


class DiscordReplyChannel:
    """ReplyChannel backed by a Discord interaction.

    The first ``show`` after ``defer`` fills in the deferred response. Later
    calls edit that same message.
    """

    def __init__(self, interaction: discord.Interaction) -> None:
        self._interaction = interaction

    async def defer(self) -> None:
        try:
            await self._interaction.response.defer()
        except discord.DiscordException as e:
            raise ReplyChannelError(f"Failed to defer interaction: {e}") from e

    async def show(self, message: StatusMessage) -> None:
        try:
            await self._interaction.edit_original_response(embed=to_embed(message))
        except discord.DiscordException as e:
            raise ReplyChannelError(f"Failed to edit interaction response: {e}") from e

    async def reject(self, text: str) -> None:
        try:
            await self._interaction.response.send_message(text, ephemeral=True)
        except discord.DiscordException as e:
            raise ReplyChannelError(f"Failed to send rejection: {e}") from e


def _option_values(data: dict[str, Any]) -> dict[str, Any]:
    return {
        option["name"]: option.get("value")
        for option in data.get("options", [])
        if isinstance(option, dict) and "name" in option
    }


def parse_update_request(interaction: discord.Interaction) -> CommandRequest | None:
    """Extract a CommandRequest from an ``/update`` interaction.

    Returns:
        The request, or None if the interaction is not an ``/update``
        application command.

    Raises:
        InvalidCommandError: If the ``table`` or ``id`` option is missing or
            has the wrong type.
    """
    if interaction.type is not discord.InteractionType.application_command:
        return None
    data: dict[str, Any] = dict(interaction.data or {})
    if data.get("name") != UPDATE_COMMAND_NAME:
        return None

    options = _option_values(data)
    table, record_id = options.get("table"), options.get("id")
    if not isinstance(table, str) or not isinstance(record_id, int):
        raise InvalidCommandError(f"Malformed /update options: {options}")

    user = interaction.user
    return CommandRequest(
        table=table,
        record_id=record_id,
        requester=Requester.from_parts(
            id=user.id,
            username=user.name,
            discriminator=user.discriminator,
            global_name=user.global_name,
        ),
    )


class BridgeClient(discord.Client):
    """Discord client that hands ``/update`` commands to the orchestrator."""

    def __init__(
        self,
        router: CommandRouter,
        orchestrator: UpdateOrchestrator,
        **options: Any,
    ) -> None:
        intents = discord.Intents.none()
        intents.guilds = True
        intents.guild_messages = True
        super().__init__(intents=intents, **options)
        self.router = router
        self.orchestrator = orchestrator

    async def on_ready(self) -> None:
        logger.info("Logged in as %s!", self.user)

    async def on_interaction(self, interaction: discord.Interaction) -> None:
        try:
            request = parse_update_request(interaction)
        except InvalidCommandError as e:
            logger.warning("Rejecting /update: %s", e)
            try:
                await DiscordReplyChannel(interaction).reject(MALFORMED_UPDATE_MESSAGE)
            except ReplyChannelError as reject_error:
                logger.error("Could not send rejection: %s", reject_error)
            return
        if request is None:
            return
        logger.info(
            "Received /update table=%s id=%s from %s",
            request.table, request.record_id, request.requester.tag,
        )
        await dispatch_update(
            request,
            self.router,
            self.orchestrator,
            DiscordReplyChannel(interaction),
        )

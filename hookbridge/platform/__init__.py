"""Chat platform adapters."""

from hookbridge.platform.discord_bot import (
    BridgeClient,
    DiscordReplyChannel,
    parse_update_request,
    to_embed,
)

__all__ = [
    "BridgeClient",
    "DiscordReplyChannel",
    "parse_update_request",
    "to_embed",
]
